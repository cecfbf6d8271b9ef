"""Tests for signup validation and normalization."""

import pytest
from pydantic import ValidationError

from artschool_signup.commonUtils.enumUtils import SignupStep
from artschool_signup.schemas.signupSchema import SignupDraft, SignupRecord


class TestSignupRecord:

    def test_strings_are_trimmed(self):
        record = SignupRecord(first_name="  Ada ", last_name=" Lovelace", email=" ada@example.com ")

        assert record.first_name == "Ada"
        assert record.last_name == "Lovelace"
        assert record.email == "ada@example.com"

    def test_blank_optionals_become_none(self):
        record = SignupRecord(
            first_name="Ada", last_name="Lovelace", email="ada@example.com",
            phone="   ", notes="", experience_level="",
        )

        assert record.phone is None
        assert record.notes is None
        assert record.experience_level is None
        assert record.interests == []
        assert record.availability == ""

    def test_interests_are_deduplicated_in_order(self):
        record = SignupRecord(
            first_name="Ada", last_name="Lovelace", email="ada@example.com",
            interests=["Watercolor", "Drawing", "Watercolor"],
        )

        assert record.interests == ["Watercolor", "Drawing"]

    def test_enum_values_are_plain_strings(self):
        record = SignupRecord(
            first_name="Ada", last_name="Lovelace", email="ada@example.com",
            interests=["Oil Painting"], experience_level="Beginner",
        )

        assert record.model_dump()["interests"] == ["Oil Painting"]
        assert record.experience_level == "Beginner"

    @pytest.mark.parametrize("email", ["not-an-email", "ada@example", "@example.com", "ada @example.com", ""])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValidationError):
            SignupRecord(first_name="Ada", last_name="Lovelace", email=email)

    def test_whitespace_only_name_rejected(self):
        with pytest.raises(ValidationError):
            SignupRecord(first_name="   ", last_name="Lovelace", email="ada@example.com")

    def test_unknown_interest_rejected(self):
        with pytest.raises(ValidationError):
            SignupRecord(first_name="Ada", last_name="Lovelace", email="ada@example.com", interests=["Pottery"])


class TestSignupDraft:

    def test_contact_step_requires_names_and_email(self):
        errors = SignupDraft().step_errors(SignupStep.CONTACT)
        assert set(errors) == {"first_name", "last_name", "email"}

    def test_contact_step_checks_email_shape(self):
        draft = SignupDraft(first_name="Ada", last_name="Lovelace", email="not-an-email")
        assert draft.step_errors(SignupStep.CONTACT) == {"email": "Please enter a valid email address."}

    def test_interests_step_requires_a_selection(self):
        assert "interests" in SignupDraft().step_errors(SignupStep.INTERESTS)
        assert SignupDraft(interests=["Sculpture"]).step_errors(SignupStep.INTERESTS) == {}

    def test_availability_step_requires_text(self):
        assert "availability" in SignupDraft(availability="   ").step_errors(SignupStep.AVAILABILITY)
        assert SignupDraft(availability="Sat mornings").step_errors(SignupStep.AVAILABILITY) == {}

    def test_validation_errors_cover_every_step(self):
        errors = SignupDraft(first_name="Ada").validation_errors()
        assert {"last_name", "email", "interests", "availability"} <= set(errors)
        assert "first_name" not in errors

    def test_validation_errors_include_model_errors(self, valid_draft_fields):
        draft = SignupDraft(**{**valid_draft_fields, "experience_level": "Grandmaster"})
        assert "experience_level" in draft.validation_errors()

    def test_valid_draft_converts_to_record(self, valid_draft_fields):
        draft = SignupDraft(**valid_draft_fields)

        assert draft.validation_errors() == {}
        record = draft.to_record()
        assert record.phone is None
        assert record.interests == ["Drawing", "Watercolor"]

    def test_length_limits_are_reported_on_their_own_step(self, valid_draft_fields):
        draft = SignupDraft(**{**valid_draft_fields, "phone": "5" * 40, "notes": "x" * 2001})

        assert "phone" in draft.step_errors(SignupStep.CONTACT)
        assert "notes" in draft.step_errors(SignupStep.INTERESTS)
        assert draft.step_errors(SignupStep.AVAILABILITY) == {}
