from datetime import datetime
from typing import Optional, List
from beanie import Document
from pydantic import Field


class Signup(Document):
    """Prospective student signup, one document per form submission"""
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    interests: List[str] = Field(default_factory=list)
    availability: str = ""
    notes: Optional[str] = None
    experience_level: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "signups"
        indexes = [
            [("email", 1)],
        ]
