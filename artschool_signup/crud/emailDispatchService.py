# ------------------------------------------------------------------------------------------------------#
#                                 Email Dispatch (Postmark proxy)                                       #
# ------------------------------------------------------------------------------------------------------#
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from artschool_signup.commonUtils.errors import (
    ClientValidationError,
    ConfigurationError,
    EmailDispatchError,
    MethodNotAllowedError,
    UnexpectedDispatchError,
    UpstreamRejectionError,
)
from artschool_signup.config.settings import EmailDispatchConfig
from artschool_signup.schemas.emailSchema import SendEmailRequest

logger = logging.getLogger(__name__)

ALLOWED_METHODS = "POST,OPTIONS"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
}

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ALLOWED_METHODS,
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "86400",
}

DRY_RUN_MESSAGE = "Simulated send (Postmark not contacted)."


@dataclass
class DispatchResult:
    """Status, JSON body and headers the endpoint answers with. ``body`` is None for 204."""
    status_code: int
    body: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=lambda: dict(CORS_HEADERS))


def parse_provider_body(response: httpx.Response) -> Optional[Any]:
    """Decode the provider's JSON reply, or None when it is empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def validate_payload(payload: Any) -> SendEmailRequest:
    if not isinstance(payload, dict):
        raise ClientValidationError()
    try:
        return SendEmailRequest.model_validate(payload)
    except ValidationError:
        raise ClientValidationError()


async def send_via_postmark(request: SendEmailRequest, config: EmailDispatchConfig,
                            client: httpx.AsyncClient) -> Any:
    """Single POST to Postmark. Returns the parsed reply or raises on rejection."""
    try:
        response = await client.post(
            config.POSTMARK_API_URL,
            headers={
                "X-Postmark-Server-Token": config.POSTMARK_SERVER_TOKEN,
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            json=request.to_postmark(config.POSTMARK_FROM_EMAIL),
            timeout=config.EMAIL_TIMEOUT_SECONDS,
        )
        data = parse_provider_body(response)
    except Exception as e:
        logger.error(f"[send-email] unexpected error: {str(e)}", exc_info=True)
        raise UnexpectedDispatchError() from e

    logger.info(f"[send-email] postmark response status={response.status_code} data={data}")

    if not response.is_success:
        raise UpstreamRejectionError(status_code=response.status_code, details=data)
    return data


async def _dispatch(method: str, payload: Any, config: EmailDispatchConfig,
                    client: Optional[httpx.AsyncClient]) -> DispatchResult:
    method = method.upper()
    if method == "OPTIONS":
        return DispatchResult(status_code=204, headers=dict(PREFLIGHT_HEADERS))
    if method != "POST":
        raise MethodNotAllowedError()

    logger.info(
        f"[send-email] invoked dryRun={config.EMAIL_DRY_RUN} "
        f"hasToken={bool(config.POSTMARK_SERVER_TOKEN)} hasFrom={bool(config.POSTMARK_FROM_EMAIL)}"
    )

    try:
        request = validate_payload(payload)
    except ClientValidationError:
        fields = payload if isinstance(payload, dict) else {}
        logger.warning(
            f"[send-email] missing fields to={bool(fields.get('to'))} "
            f"subject={bool(fields.get('subject'))} text={bool(fields.get('text'))}"
        )
        raise

    logger.info(f"[send-email] payload to={request.to} subject={request.subject!r} textLen={len(request.text)}")

    if config.EMAIL_DRY_RUN:
        logger.info("[send-email] DRY_RUN=true → not contacting Postmark")
        return DispatchResult(
            status_code=200,
            body={
                "ok": True,
                "dryRun": True,
                "message": DRY_RUN_MESSAGE,
                "echo": {key: payload.get(key) for key in ("to", "subject", "text")},
            },
        )

    if not config.is_configured:
        logger.error(
            f"⚠️ [send-email] missing Postmark env vars "
            f"missingToken={not config.POSTMARK_SERVER_TOKEN} missingFrom={not config.POSTMARK_FROM_EMAIL}"
        )
        raise ConfigurationError()

    if client is None:
        async with httpx.AsyncClient() as own_client:
            data = await send_via_postmark(request, config, own_client)
    else:
        data = await send_via_postmark(request, config, client)
    return DispatchResult(status_code=200, body={"ok": True, "data": data})


async def dispatch_email(method: str, payload: Any, config: EmailDispatchConfig,
                         client: Optional[httpx.AsyncClient] = None) -> DispatchResult:
    """
    Decide between a simulated and a real send and describe the outcome.

    Args:
        method: HTTP method of the incoming request
        payload: Decoded JSON body, or None when the body was missing or not JSON
        config: Dispatch configuration read for this request
        client: HTTP client used for the Postmark call; a short-lived one is opened when omitted

    Returns:
        DispatchResult ready to be turned into an HTTP response
    """
    try:
        return await _dispatch(method, payload, config, client)
    except MethodNotAllowedError as e:
        headers = dict(CORS_HEADERS, Allow=ALLOWED_METHODS)
        return DispatchResult(status_code=e.status_code, body=e.to_body(), headers=headers)
    except EmailDispatchError as e:
        return DispatchResult(status_code=e.status_code, body=e.to_body())
