# wanderai/api/schemas.py
"""Request validation schemas."""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from wanderai.api.currency import DEFAULT_RATES
from wanderai.api.models import TripRequest

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ItineraryRequestSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    city: str = Field(min_length=1)
    budget: float = Field(ge=100)
    days: int = Field(ge=1, le=14)
    difficulty: Literal["easy", "medium", "hard"]
    currency: str = "USD"

    @field_validator("currency")
    @classmethod
    def _supported_currency(cls, value: str) -> str:
        code = value.upper()
        if code not in DEFAULT_RATES:
            raise ValueError(f"Currency must be one of: {', '.join(sorted(DEFAULT_RATES))}")
        return code

    def to_trip_request(self) -> TripRequest:
        return TripRequest(
            destination=self.city,
            total_budget=self.budget,
            total_days=self.days,
            pace=self.difficulty,
            currency=self.currency,
        )


class LoginSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        if not EMAIL_RE.match(value):
            raise ValueError("Invalid email format")
        return value.lower()


class SignupSchema(LoginSchema):
    name: str = Field(min_length=2)
    password: str = Field(min_length=8)
    confirm_password: str = Field(alias="confirmPassword")

    @field_validator("password")
    @classmethod
    def _strong_password(cls, value: str) -> str:
        if not re.search(r"[A-Z]", value):
            raise ValueError("Password must contain an uppercase letter")
        if not re.search(r"[a-z]", value):
            raise ValueError("Password must contain a lowercase letter")
        if not re.search(r"\d", value):
            raise ValueError("Password must contain a number")
        return value

    @model_validator(mode="after")
    def _passwords_match(self) -> "SignupSchema":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


def validation_details(error) -> list:
    """JSON-safe error list without echoing submitted values."""
    return error.errors(include_url=False, include_context=False, include_input=False)


__all__ = ["ItineraryRequestSchema", "LoginSchema", "SignupSchema", "validation_details"]
