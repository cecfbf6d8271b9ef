from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from artschool_signup.commonUtils.emailUtil import EmailNotifier
from artschool_signup.commonUtils.enumUtils import SignupStep
from artschool_signup.commonUtils.errors import SignupStoreError
from artschool_signup.config.settings import settings
from artschool_signup.crud.signupFlowService import SUCCESS_MESSAGE, SignupFormState, register_signup
from artschool_signup.crud.signupService import SignupStoreClient
from artschool_signup.dependencies.signup_dependencies import get_email_notifier, get_signup_store
from artschool_signup.schemas.signupSchema import EXPERIENCE_LEVELS, INTEREST_CATALOG, SignupDraft, SignupRecord

router = APIRouter()
api_router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def render_form(request: Request, form: SignupFormState, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "signup.html",
        {
            "form": form,
            "data": form.draft,
            "steps": list(SignupStep),
            "interest_catalog": INTEREST_CATALOG,
            "experience_levels": EXPERIENCE_LEVELS,
            "dry_run": settings.EMAIL_DRY_RUN_BANNER,
            "school_name": settings.SCHOOL_NAME,
        },
        status_code=status_code,
    )


@router.get("/", include_in_schema=False)
async def signup_page(
        request: Request,
        store: SignupStoreClient = Depends(get_signup_store),
        notifier: EmailNotifier = Depends(get_email_notifier),
):
    return render_form(request, SignupFormState(store, notifier))


@router.post("/signup", include_in_schema=False)
async def signup_step(
        request: Request,
        action: str = Form("next"),
        step: int = Form(0),
        first_name: str = Form(""),
        last_name: str = Form(""),
        email: str = Form(""),
        phone: str = Form(""),
        interests: List[str] = Form([]),
        availability: str = Form(""),
        notes: str = Form(""),
        experience_level: str = Form(""),
        store: SignupStoreClient = Depends(get_signup_store),
        notifier: EmailNotifier = Depends(get_email_notifier),
):
    """Handle one wizard transition: back, next or the final submit"""
    draft = SignupDraft(
        first_name=first_name, last_name=last_name, email=email, phone=phone,
        interests=interests, availability=availability, notes=notes,
        experience_level=experience_level,
    )
    form = SignupFormState(store, notifier, draft=draft, step=step)

    if action == "back":
        form.previous_step()
        return render_form(request, form)

    if action == "submit":
        outcome = await form.submit()
        if outcome.ok:
            return RedirectResponse(url="/thank-you", status_code=status.HTTP_303_SEE_OTHER)
        code = status.HTTP_502_BAD_GATEWAY if outcome.status == "store_error" else status.HTTP_400_BAD_REQUEST
        return render_form(request, form, status_code=code)

    if not form.next_step() and form.field_errors:
        return render_form(request, form, status_code=status.HTTP_400_BAD_REQUEST)
    return render_form(request, form)


@router.get("/thank-you", include_in_schema=False)
async def thank_you(request: Request):
    return templates.TemplateResponse(
        request,
        "thank_you.html",
        {"dry_run": settings.EMAIL_DRY_RUN_BANNER, "school_name": settings.SCHOOL_NAME},
    )


@api_router.post("/signups")
async def create_signup(
        data: SignupRecord,
        store: SignupStoreClient = Depends(get_signup_store),
        notifier: EmailNotifier = Depends(get_email_notifier),
):
    """Single-page signup: store the record, then send the welcome email"""
    try:
        await register_signup(data, store, notifier)
    except SignupStoreError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return {"status": "ok", "message": SUCCESS_MESSAGE}
