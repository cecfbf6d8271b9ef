import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from artschool_signup.config.settings import EmailDispatchConfig
from artschool_signup.crud.emailDispatchService import dispatch_email
from artschool_signup.dependencies.signup_dependencies import get_email_config, get_postmark_client

router = APIRouter()


# Every method is routed here so unsupported ones get a 405 with an Allow header
@router.api_route(
    "/api/send-email",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def send_email(
        request: Request,
        config: EmailDispatchConfig = Depends(get_email_config),
        client: httpx.AsyncClient = Depends(get_postmark_client),
):
    """Send one email through Postmark, or simulate it in dry-run mode"""
    payload = None
    if request.method == "POST":
        try:
            payload = await request.json()
        except ValueError:
            payload = None

    result = await dispatch_email(request.method, payload, config, client)

    if result.body is None:
        return Response(status_code=result.status_code, headers=result.headers)
    return JSONResponse(status_code=result.status_code, content=result.body, headers=result.headers)
