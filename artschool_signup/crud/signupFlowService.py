# ------------------------------------------------------------------------------------------------------#
#                                 Signup Wizard & Submission Flow                                       #
# ------------------------------------------------------------------------------------------------------#
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from artschool_signup.commonUtils.emailUtil import EmailNotifier
from artschool_signup.commonUtils.enumUtils import SignupStep
from artschool_signup.commonUtils.errors import SignupStoreError
from artschool_signup.crud.signupService import SignupStoreClient
from artschool_signup.schemas.signupSchema import FIELD_STEPS, INTEREST_CATALOG, LAST_STEP, SignupDraft, SignupRecord

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Thanks! You’re on the list. We’ll reach out shortly with class options."
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."
INVALID_MESSAGE = "Please fix the highlighted fields."
BUSY_MESSAGE = "Your signup is already being submitted."


@dataclass
class SubmissionOutcome:
    status: str  # "success" | "invalid" | "store_error" | "busy"
    message: Optional[str] = None
    field_errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "success"


async def register_signup(record: SignupRecord, store: SignupStoreClient, notifier: EmailNotifier) -> None:
    """
    Persist a signup, then send the welcome email.

    The insert must succeed (SignupStoreError propagates). The email is best
    effort: its outcome is logged and dropped.
    """
    await store.insert_signup(record)

    outcome = await notifier.send_welcome(record)
    if outcome.delivered:
        logger.info(f"Welcome email dispatched to {record.email}")
    else:
        logger.warning(
            f"⚠️ Welcome email not delivered to {record.email} "
            f"(status={outcome.status_code}, detail={outcome.detail})"
        )


class SignupFormState:
    """State of one signup wizard: current step, entered data and submission status."""

    def __init__(self, store: SignupStoreClient, notifier: EmailNotifier,
                 draft: Optional[SignupDraft] = None, step: int = 0):
        self.store = store
        self.notifier = notifier
        self.draft = draft or SignupDraft()
        self.step = SignupStep(min(max(int(step), 0), LAST_STEP))
        self.loading = False
        self.success_message: Optional[str] = None
        self.error_message: Optional[str] = None
        self.field_errors: Dict[str, str] = {}

    @property
    def is_last_step(self) -> bool:
        return self.step == LAST_STEP

    def update(self, **fields) -> None:
        self.draft = self.draft.model_copy(update=fields)

    def toggle_interest(self, interest: str) -> None:
        if interest not in INTEREST_CATALOG:
            raise ValueError(f"Unknown class: {interest}")
        interests = list(self.draft.interests)
        if interest in interests:
            interests.remove(interest)
        else:
            interests.append(interest)
        self.update(interests=interests)

    def can_advance(self) -> bool:
        return not self.draft.step_errors(self.step)

    def next_step(self) -> bool:
        """Move forward when the current step is complete; returns whether it moved."""
        self.field_errors = self.draft.step_errors(self.step)
        if self.field_errors or self.is_last_step:
            return False
        self.step = SignupStep(self.step + 1)
        return True

    def previous_step(self) -> None:
        self.field_errors = {}
        self.step = SignupStep(max(self.step - 1, 0))

    def reset(self) -> None:
        self.draft = SignupDraft()
        self.step = SignupStep.CONTACT
        self.field_errors = {}

    async def submit(self) -> SubmissionOutcome:
        if self.loading:
            return SubmissionOutcome(status="busy", message=BUSY_MESSAGE)

        self.loading = True
        self.success_message = None
        self.error_message = None
        try:
            self.field_errors = self.draft.validation_errors()
            if self.field_errors:
                # Show the first step that still needs attention
                self.step = min(FIELD_STEPS.get(name, LAST_STEP) for name in self.field_errors)
                self.error_message = INVALID_MESSAGE
                return SubmissionOutcome(status="invalid", message=INVALID_MESSAGE,
                                         field_errors=dict(self.field_errors))

            record = self.draft.to_record()
            try:
                await register_signup(record, self.store, self.notifier)
            except SignupStoreError as e:
                self.error_message = e.message or GENERIC_ERROR_MESSAGE
                return SubmissionOutcome(status="store_error", message=self.error_message)

            self.success_message = SUCCESS_MESSAGE
            self.reset()
            return SubmissionOutcome(status="success", message=SUCCESS_MESSAGE)
        finally:
            self.loading = False
