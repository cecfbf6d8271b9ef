# Client side of the send-email endpoint, used by the signup flow

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from artschool_signup.commonUtils.email_renderer import get_welcome_signup_email
from artschool_signup.schemas.signupSchema import SignupRecord

logger = logging.getLogger(__name__)


@dataclass
class NotificationOutcome:
    delivered: bool
    status_code: Optional[int] = None
    detail: Any = None


class EmailNotifier:
    """
    Posts welcome emails to the send-email endpoint.

    Best effort: every failure is logged and reported in the returned
    NotificationOutcome, nothing is raised to the caller.
    """

    def __init__(self, endpoint_url: str, timeout: float = 10.0,
                 client: Optional[httpx.AsyncClient] = None):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.client = client

    async def send_email(self, to: str, subject: str, text: str) -> NotificationOutcome:
        logger.info(f"📧 Sending email to {to} | Subject: {subject}")
        payload = {"to": to, "subject": subject, "text": text}
        try:
            if self.client is None:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.endpoint_url, json=payload)
            else:
                response = await self.client.post(self.endpoint_url, json=payload, timeout=self.timeout)
        except Exception as e:
            logger.warning(f"[send-email] threw: {str(e)}")
            return NotificationOutcome(delivered=False, detail=str(e))

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            logger.warning(f"[send-email] non-200 {response.status_code} {body}")
            return NotificationOutcome(delivered=False, status_code=response.status_code, detail=body)

        logger.info(f"Email accepted for {to} (dryRun={isinstance(body, dict) and bool(body.get('dryRun'))})")
        return NotificationOutcome(delivered=True, status_code=response.status_code, detail=body)

    async def send_welcome(self, record: SignupRecord) -> NotificationOutcome:
        try:
            subject, text = get_welcome_signup_email(record)
        except Exception as e:
            logger.error(f"Failed to render welcome email for {record.email}: {str(e)}", exc_info=True)
            return NotificationOutcome(delivered=False, detail=str(e))
        return await self.send_email(record.email, subject, text)
