"""
UserHub Backend - Pydantic Request/Response Schemas
====================================================

What:  The API contract for the /users resource.
How:   FastAPI validates request bodies against these models and serializes
       responses through them; the service layer validates update payloads
       with `UserUpdate` after the target record has been found.

Validation rules:
    name        required, non-empty
    age         required, finite number (integral ages are returned as integers)
    email       required, must look like <x>@<y>.<z>
    address     optional, nullable
    profession  optional, nullable

Partial updates rely on pydantic's "fields set" tracking:
`model_dump(exclude_unset=True)` contains exactly the keys the client sent,
so `{"age": 0}` or `{"address": ""}` are applied while omitted keys are not.
"""

import re
import uuid
from typing import Any, Dict, Iterable, Optional, Union

from pydantic import BaseModel, Field, field_validator


EMAIL_PATTERN = re.compile(r".+@.+\..+")

REQUIRED_FIELDS = ("name", "age", "email")

REQUIRED_FIELDS_MESSAGE = "Name, age, and email are required."


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.search(value):
        raise ValueError(f"'{value}' is not a valid email address")
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserCreate(BaseModel):
    """Body of POST /users."""

    name: str = Field(min_length=1, description="Display name (non-empty)")
    age: float = Field(allow_inf_nan=False, description="Age in years")
    address: Optional[str] = Field(default=None, description="Postal address")
    profession: Optional[str] = Field(default=None, description="Occupation")
    email: str = Field(description="Email address, unique across all users")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)


class UserUpdate(BaseModel):
    """
    Body of PUT/PATCH /users/{id}.

    Every field is optional, but a required field sent as `null` is
    rejected: the stored record must keep a name, age and email.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    age: Optional[float] = Field(default=None, allow_inf_nan=False)
    address: Optional[str] = None
    profession: Optional[str] = None
    email: Optional[str] = None

    @field_validator("name", "age", "email")
    @classmethod
    def reject_null_required(cls, v: Any) -> Any:
        # Only runs for keys the client actually sent (defaults are not validated)
        if v is None:
            raise ValueError("cannot be null")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly present in the request, with their new values."""
        return self.model_dump(exclude_unset=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """Full representation of a stored user."""

    id: uuid.UUID = Field(description="Unique user identifier (UUID)")
    name: str
    age: Union[int, float]
    address: Optional[str] = None
    profession: Optional[str] = None
    email: str

    model_config = {"from_attributes": True}

    @field_validator("age")
    @classmethod
    def integral_age_as_int(cls, v: Union[int, float]) -> Union[int, float]:
        # Ages are stored as doubles; 30 goes back out as 30, not 30.0
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health."""

    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Error formatting
# ══════════════════════════════════════════════════════════════════════════


def describe_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """
    Collapse a pydantic error list into one client-facing message.

    A missing (or null) required field yields the fixed
    "Name, age, and email are required." message; anything else is listed
    as "<field>: <reason>" pairs separated by "; ".
    """
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = loc[-1] if loc else ""
        err_type = err.get("type", "")

        if err_type == "json_invalid":
            return "Request body is not valid JSON"
        if err_type == "missing" and (not field or field in REQUIRED_FIELDS):
            return REQUIRED_FIELDS_MESSAGE
        if field in REQUIRED_FIELDS and err.get("input", "") is None:
            return REQUIRED_FIELDS_MESSAGE

        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)

    return "; ".join(parts) or "Validation failed"
