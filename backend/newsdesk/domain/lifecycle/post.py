from datetime import datetime
from typing import Dict, Optional, Sequence

from newsdesk.domain.exceptions import TransitionRejected

POST_STATUSES = ("draft", "review", "scheduled", "published", "archived")

# Targets that require a publishable post.
PUBLISH_ELIGIBLE_STATUSES = frozenset({"review", "scheduled", "published"})

# Elevated route permission per target status. Anything not listed only
# needs post:edit. Checked before the state machine runs.
TRANSITION_PERMISSIONS: Dict[str, str] = {
    "scheduled": "post:schedule",
    "published": "post:publish",
    "archived": "post:publish",
}

TRANSITION_MESSAGES: Dict[str, str] = {
    "review": "Sent for review",
    "published": "Published",
    "scheduled": "Scheduled",
}

DEFAULT_UPDATE_MESSAGE = "Post updated successfully"


def required_permission(to_status: Optional[str]) -> Optional[str]:
    if not isinstance(to_status, str):
        return None
    return TRANSITION_PERMISSIONS.get(to_status)


def assert_post_transition(
    *,
    to_status: str,
    body: Optional[str],
    tags: Sequence[str],
    scheduled_at: Optional[datetime],
    now: datetime,
) -> None:
    """
    Guards post lifecycle transitions.

    Any state may move to any other; the preconditions depend only on
    the target. ``scheduled_at`` and ``now`` must both be timezone-aware.
    """
    if to_status not in PUBLISH_ELIGIBLE_STATUSES:
        return

    if not body or not body.strip():
        raise TransitionRejected("Body required for publishing")

    if not tags:
        raise TransitionRejected("Select at least one")

    if to_status == "scheduled":
        # Missing and past-dated are reported identically.
        if scheduled_at is None or scheduled_at <= now:
            raise TransitionRejected("Invalid date")


def resolve_published_at(
    *,
    to_status: str,
    current: Optional[datetime],
    now: datetime,
) -> Optional[datetime]:
    """First publish stamps the time; later publishes keep the original."""
    if to_status == "published" and current is None:
        return now
    return current


def transition_message(to_status: Optional[str]) -> str:
    if to_status is None:
        return DEFAULT_UPDATE_MESSAGE
    return TRANSITION_MESSAGES.get(to_status, DEFAULT_UPDATE_MESSAGE)
