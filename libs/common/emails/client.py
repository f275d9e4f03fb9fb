"""
Transactional email client for the league.

Renders one of the league templates and posts it to the email provider's
v3 mail API (SendGrid-compatible JSON). Sending is best-effort: failures
are logged and reported on the returned `NotificationResult`, never raised.

Usage:
    from libs.common.emails.client import get_email_client

    email_client = get_email_client()

    result = await email_client.send_template(
        template_type="gymnast_welcome",
        to_email="gymnast@example.com",
        template_data={
            "gymnast_name": "Ada Levi",
            "gym_name": "Maccabi Gymnastics",
            "level": "4",
            "login_url": "https://jglgymnastics.org/login",
        },
    )
    if not result.success:
        ...
"""

from dataclasses import dataclass
from typing import Any, Optional

import httpx
from libs.common.config import get_settings
from libs.common.emails.templates import TEMPLATE_RENDERERS
from libs.common.errors import NotificationFailure
from libs.common.logging import get_logger

logger = get_logger(__name__)


@dataclass
class NotificationResult:
    """Outcome of a single email send."""

    success: bool
    to_email: str
    template_type: Optional[str] = None
    error: Optional[NotificationFailure] = None


class EmailClient:
    """
    HTTP client for the transactional email provider.

    `transport` lets tests swap in an `httpx.MockTransport`; production uses
    httpx's default network transport.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = get_settings()
        self.api_url = settings.EMAIL_API_URL
        self.api_key = settings.EMAIL_API_KEY
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS
        self.from_email = settings.DEFAULT_FROM_EMAIL
        self.from_name = settings.DEFAULT_FROM_NAME
        self._transport = transport

    def _build_payload(
        self, to_email: str, subject: str, body: str, html_body: Optional[str]
    ) -> dict[str, Any]:
        content = [{"type": "text/plain", "value": body}]
        if html_body:
            content.append({"type": "text/html", "value": html_body})
        return {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": subject,
            "content": content,
        }

    def _failure(
        self, to_email: str, template_type: Optional[str], message: str
    ) -> NotificationResult:
        logger.error(
            message,
            extra={"extra_fields": {"to_email": to_email, "template": template_type}},
        )
        return NotificationResult(
            success=False,
            to_email=to_email,
            template_type=template_type,
            error=NotificationFailure(message),
        )

    async def send(
        self,
        to_email: str,
        subject: str,
        body: str,
        html_body: Optional[str] = None,
        template_type: Optional[str] = None,
    ) -> NotificationResult:
        """
        Send a single email.

        Args:
            to_email: Recipient email address
            subject: Email subject line
            body: Plain text body
            html_body: Optional HTML body
            template_type: Template name, carried on the result for logging

        Returns:
            NotificationResult; `success` is True only on a 2xx from the provider
        """
        if not self.api_key:
            logger.warning(
                "EMAIL_API_KEY not configured; skipping email",
                extra={"extra_fields": {"to_email": to_email, "subject": subject}},
            )
            return NotificationResult(
                success=False,
                to_email=to_email,
                template_type=template_type,
                error=NotificationFailure("Email API key is not configured"),
            )

        payload = self._build_payload(to_email, subject, body, html_body)
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            return self._failure(
                to_email, template_type, f"Failed to reach email provider: {e}"
            )

        if not response.is_success:
            return self._failure(
                to_email,
                template_type,
                f"Email API returned {response.status_code}: {response.text}",
            )

        logger.info(
            "Email sent",
            extra={"extra_fields": {"to_email": to_email, "template": template_type}},
        )
        return NotificationResult(
            success=True, to_email=to_email, template_type=template_type
        )

    async def send_template(
        self,
        template_type: str,
        to_email: str,
        template_data: dict[str, Any],
    ) -> NotificationResult:
        """
        Render a league template and send it.

        Available template types:
        - gymnast_welcome: Registration approved, gymnast created
        - registration_rejected: Registration declined with reason
        - roster_upload_summary: Roster batch finished
        - coach_registration_alert: New request awaiting coach review

        Raises:
            ValueError: unknown template type
        """
        renderer = TEMPLATE_RENDERERS.get(template_type)
        if renderer is None:
            raise ValueError(f"Unknown email template: {template_type}")

        rendered = renderer(**template_data)
        return await self.send(
            to_email=to_email,
            subject=rendered.subject,
            body=rendered.body,
            html_body=rendered.html_body,
            template_type=template_type,
        )


_email_client: Optional[EmailClient] = None


def get_email_client() -> EmailClient:
    """Get or create the singleton EmailClient instance."""
    global _email_client
    if _email_client is None:
        _email_client = EmailClient()
    return _email_client
