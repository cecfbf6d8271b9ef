from pydantic import BaseModel, Field, field_validator


class SendEmailRequest(BaseModel):
    """Body accepted by the send-email endpoint."""
    to: str = Field(..., min_length=1, description="Recipient address")
    subject: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1, description="Plain-text body")

    @field_validator("to", "subject", "text", mode="before")
    @classmethod
    def coerce_to_string(cls, v):
        return "" if v is None else str(v)

    def to_postmark(self, sender: str) -> dict:
        return {
            "From": sender,
            "To": self.to,
            "Subject": self.subject,
            "TextBody": self.text,
        }
