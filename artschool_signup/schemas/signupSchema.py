import re
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from artschool_signup.commonUtils.enumUtils import ExperienceLevel, Interest, SignupStep

# Minimal local@domain.tld shape, the same check the browser form applies
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

INTEREST_CATALOG = [interest.value for interest in Interest]
EXPERIENCE_LEVELS = [level.value for level in ExperienceLevel]

LAST_STEP = max(SignupStep)

# Wizard step whose page renders each field
FIELD_STEPS = {
    "first_name": SignupStep.CONTACT,
    "last_name": SignupStep.CONTACT,
    "email": SignupStep.CONTACT,
    "phone": SignupStep.CONTACT,
    "interests": SignupStep.INTERESTS,
    "experience_level": SignupStep.INTERESTS,
    "notes": SignupStep.INTERESTS,
    "availability": SignupStep.AVAILABILITY,
}


def _unique(values) -> List[str]:
    seen = []
    for value in values:
        value = value.strip() if isinstance(value, str) else value
        if value not in seen:
            seen.append(value)
    return seen


class SignupRecord(BaseModel):
    """Validated, normalized signup as it is written to the store."""
    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    first_name: str = Field(..., min_length=1, max_length=100, description="Student's first name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Student's last name")
    email: str = Field(..., max_length=254, pattern=EMAIL_PATTERN.pattern, description="Contact email")
    phone: Optional[str] = Field(None, max_length=30, description="Contact phone number")
    interests: List[Interest] = Field(default_factory=list, description="Classes the student is interested in")
    availability: str = Field("", max_length=500, description="When the student can attend")
    notes: Optional[str] = Field(None, max_length=2000)
    experience_level: Optional[ExperienceLevel] = None

    @field_validator("phone", "notes", "experience_level", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("interests", mode="before")
    @classmethod
    def unique_interests(cls, v):
        if v is None:
            return []
        return _unique(v)

    @field_validator("availability", mode="before")
    @classmethod
    def availability_default(cls, v):
        return "" if v is None else v


class SignupDraft(BaseModel):
    """Raw form input, possibly incomplete, as the wizard holds it between steps."""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    interests: List[str] = Field(default_factory=list)
    availability: str = ""
    notes: str = ""
    experience_level: str = ""

    def step_errors(self, step: SignupStep) -> Dict[str, str]:
        """Field errors that keep the wizard from leaving ``step``.

        Besides the required-field checks, any ``SignupRecord`` constraint
        (length limits, experience level) is reported on the step whose
        form shows that field.
        """
        errors = {}
        if step == SignupStep.CONTACT:
            if not self.first_name.strip():
                errors["first_name"] = "First name is required."
            if not self.last_name.strip():
                errors["last_name"] = "Last name is required."
            email = self.email.strip()
            if not email:
                errors["email"] = "Email is required."
            elif not EMAIL_PATTERN.match(email):
                errors["email"] = "Please enter a valid email address."
        elif step == SignupStep.INTERESTS:
            if not self.interests:
                errors["interests"] = "Pick at least one class."
            else:
                unknown = [i for i in self.interests if i.strip() not in INTEREST_CATALOG]
                if unknown:
                    errors["interests"] = f"Unknown class: {', '.join(unknown)}."
        elif step == SignupStep.AVAILABILITY:
            if not self.availability.strip():
                errors["availability"] = "Let us know when you're available."

        for name, message in self.record_errors().items():
            if FIELD_STEPS.get(name, LAST_STEP) == step:
                errors.setdefault(name, message)
        return errors

    def record_errors(self) -> Dict[str, str]:
        """First ``SignupRecord`` validation message per field."""
        try:
            self.to_record()
        except ValidationError as e:
            errors = {}
            for err in e.errors():
                name = str(err["loc"][0]) if err["loc"] else "form"
                errors.setdefault(name, err["msg"])
            return errors
        return {}

    def validation_errors(self) -> Dict[str, str]:
        errors = {}
        for step in SignupStep:
            errors.update(self.step_errors(step))
        return errors

    def to_record(self) -> SignupRecord:
        return SignupRecord(**self.model_dump())
