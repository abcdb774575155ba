import hashlib
import hmac
import time
from typing import Optional
from urllib.parse import urlencode

from newsdesk.domain.exceptions import PreviewLinkExpired


def _now_ms() -> int:
    return int(time.time() * 1000)


def sign_preview(post_id: str, timestamp: int, secret: str) -> str:
    message = f"{post_id}-{timestamp}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def issue_preview_url(post_id: str, *, secret: str, issued_at: Optional[int] = None) -> str:
    """
    Builds ``/preview/<id>?t=<ms>&h=<hex>``.

    The timestamp is part of the signed message, so every issuance gets
    its own tag; nothing is cached.
    """
    timestamp = _now_ms() if issued_at is None else issued_at
    digest = sign_preview(post_id, timestamp, secret)
    return f"/preview/{post_id}?{urlencode({'t': timestamp, 'h': digest})}"


def verify_preview_signature(
    post_id: str,
    timestamp,
    digest,
    *,
    secret: str,
    max_age: Optional[int] = None,
    now: Optional[int] = None,
) -> bool:
    """
    Re-derives the tag for ``post_id``/``timestamp`` and compares it in
    constant time. ``max_age`` is in seconds; ``None`` disables expiry.

    Raises PreviewLinkExpired for an expired but otherwise valid link so
    the caller can tell the two failures apart.
    """
    if not digest or not isinstance(timestamp, str):
        return False

    # Canonical digits only, so exactly one `t` string matches a tag
    if not (timestamp.isascii() and timestamp.isdigit()):
        return False

    timestamp = int(timestamp)

    expected = sign_preview(post_id, timestamp, secret)
    if not hmac.compare_digest(expected.encode("utf-8"), str(digest).encode("utf-8")):
        return False

    if max_age is not None:
        current = _now_ms() if now is None else now
        if current - timestamp > max_age * 1000:
            raise PreviewLinkExpired("Preview link expired")

    return True
