from typing import AsyncIterator

import httpx

from artschool_signup.commonUtils.emailUtil import EmailNotifier
from artschool_signup.config.settings import EmailDispatchConfig, settings
from artschool_signup.crud.signupService import SignupStoreClient


def get_email_config() -> EmailDispatchConfig:
    """Read the dispatch configuration fresh for every request."""
    return EmailDispatchConfig()


async def get_postmark_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient() as client:
        yield client


def get_signup_store() -> SignupStoreClient:
    return SignupStoreClient()


def get_email_notifier() -> EmailNotifier:
    return EmailNotifier(settings.EMAIL_ENDPOINT_URL, timeout=settings.EMAIL_NOTIFY_TIMEOUT_SECONDS)
