from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

import requests
from flask import current_app

# Detached notifier tasks. Single attempt each, no retry.
_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="revalidate")


def notify_revalidation(path: str) -> bool:
    """
    POSTs ``{"path": path}`` to the configured revalidation webhook.

    Best effort: every failure (timeout, connection error, non-2xx) is
    logged and reported as ``False``; nothing is raised.
    """
    url = current_app.config.get("REVALIDATE_WEBHOOK_URL")
    if not url:
        current_app.logger.debug("Revalidation webhook not configured; skipping %s", path)
        return False

    try:
        response = requests.post(
            url,
            json={"path": path},
            headers={"X-Revalidate-Secret": current_app.config["REVALIDATE_SECRET"]},
            timeout=current_app.config.get("REVALIDATE_TIMEOUT", 5),
        )
    except requests.RequestException as exc:
        current_app.logger.warning("Revalidation webhook failed for %s: %s", path, exc)
        return False

    if not response.ok:
        current_app.logger.warning(
            "Revalidation webhook returned %s for %s", response.status_code, path
        )
        return False

    current_app.logger.info("Revalidation webhook accepted %s", path)
    return True


def _run_detached(app, path: str) -> bool:
    with app.app_context():
        try:
            return notify_revalidation(path)
        except Exception:
            # Last line of defence for a detached task: log, never propagate.
            app.logger.exception("Revalidation task crashed for %s", path)
            return False


def dispatch_revalidation(path: str) -> Optional[Future]:
    """
    Fires the notifier without tying the caller to its outcome.

    Runs inline when ``REVALIDATE_ASYNC`` is off (tests), otherwise on
    the background executor and returns the future.
    """
    app = current_app._get_current_object()

    if not app.config.get("REVALIDATE_WEBHOOK_URL"):
        return None

    if not app.config.get("REVALIDATE_ASYNC", True):
        _run_detached(app, path)
        return None

    return _executor.submit(_run_detached, app, path)
