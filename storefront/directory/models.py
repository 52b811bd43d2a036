"""Directory models - identity records, profile records, callers."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

UNNAMED_MEMBER = "Unnamed member"


@dataclass(frozen=True)
class CallerIdentity:
    """The authenticated account making a request."""
    uid: str
    email: Optional[str] = None


class IdentityRecord(BaseModel):
    """An account as the identity provider sees it."""
    id: str
    email: Optional[str] = None
    disabled: bool = False

    class Config:
        extra = "ignore"


class UserRecord(BaseModel):
    """A member profile as listed on the admin members page."""
    id: str
    name: str = UNNAMED_MEMBER
    email: str = ""
    created_at: Optional[datetime] = None
    disabled: bool = False

    class Config:
        extra = "ignore"

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v):
        return v if isinstance(v, str) and v.strip() else UNNAMED_MEMBER

    @field_validator("email", mode="before")
    @classmethod
    def default_email(cls, v):
        return v if isinstance(v, str) else ""

    @field_validator("disabled", mode="before")
    @classmethod
    def default_disabled(cls, v):
        return bool(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v):
        if v in (None, ""):
            return None
        return v

    @property
    def status(self) -> str:
        return "disabled" if self.disabled else "active"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "disabled": self.disabled,
        }
