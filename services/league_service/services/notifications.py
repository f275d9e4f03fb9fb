"""Best-effort notification helpers.

Workflows call `notify` and never look at the outcome beyond logging: a
failed email must not fail or roll back the operation that triggered it.
"""

from typing import Any, Optional, Protocol

from libs.common.emails.client import NotificationResult
from libs.common.errors import NotificationFailure
from libs.common.logging import get_logger

logger = get_logger(__name__)


class Notifier(Protocol):
    async def send_template(
        self,
        template_type: str,
        to_email: str,
        template_data: dict[str, Any],
    ) -> NotificationResult: ...


async def notify(
    notifier: Notifier,
    template_type: str,
    to_email: Optional[str],
    template_data: dict[str, Any],
) -> Optional[NotificationResult]:
    """Send one templated email; log and discard any failure.

    Returns None when there is no recipient.
    """
    if not to_email:
        logger.info(
            "No recipient for %s notification; skipping",
            template_type,
            extra={"extra_fields": {"template": template_type}},
        )
        return None

    try:
        result = await notifier.send_template(
            template_type=template_type,
            to_email=to_email,
            template_data=template_data,
        )
    except Exception as e:
        logger.exception(
            "Notification %s to %s raised",
            template_type,
            to_email,
            extra={"extra_fields": {"template": template_type, "to_email": to_email}},
        )
        return NotificationResult(
            success=False,
            to_email=to_email,
            template_type=template_type,
            error=NotificationFailure(str(e)),
        )

    if not result.success:
        logger.warning(
            "Notification %s to %s failed: %s",
            template_type,
            to_email,
            result.error.message if result.error else "unknown error",
            extra={"extra_fields": {"template": template_type, "to_email": to_email}},
        )
    return result
