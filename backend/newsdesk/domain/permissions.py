from typing import Dict, FrozenSet

ROLES = ("admin", "editor", "contributor")

# Each role is enumerated explicitly; nothing is inherited.
ROLE_PERMISSIONS: Dict[str, FrozenSet[str]] = {
    "admin": frozenset({
        "post:create", "post:edit", "post:edit:any", "post:view",
        "post:publish", "post:delete", "post:review", "post:schedule",
        "user:create", "user:edit", "user:delete", "user:view",
        "media:upload", "media:delete", "media:view",
        "analytics:view", "settings:edit",
    }),
    "editor": frozenset({
        "post:create", "post:edit", "post:edit:any", "post:view",
        "post:publish", "post:delete", "post:review", "post:schedule",
        "user:view",
        "media:upload", "media:delete", "media:view",
        "analytics:view",
    }),
    "contributor": frozenset({
        "post:create", "post:edit", "post:view",
        "media:upload", "media:view",
    }),
}


def can(role: str | None, action: str) -> bool:
    """
    Static role -> action lookup.
    Independent of any data state; unknown roles get nothing.
    """
    return action in ROLE_PERMISSIONS.get(role or "", frozenset())


def permission_denied_message(action: str) -> str:
    return f"You don't have permission to perform this action: {action}"
