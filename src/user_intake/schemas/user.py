"""Pydantic model for a validated user record.

The field constraints restate the validator's invariants, so a
``ValidatedUser`` cannot exist in an invalid state even when built directly.
"""

from __future__ import annotations

from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# Declaration order is also validation order.
FIELDS: tuple[str, ...] = ("name", "age", "email", "phone", "gender", "country", "dob")

RawRecord = Mapping[str, Optional[str]]

EMAIL_PATTERN = r"^\S+@\S+\.\S+$"

Gender = Literal["Male", "Female", "Other"]


class ValidatedUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=120)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: str = Field(..., min_length=10, pattern=r"^[0-9]+$")
    gender: Gender
    country: str = Field(..., min_length=1)
    dob: str

    def as_row(self) -> dict[str, Any]:
        """Return the seven business columns keyed by column name."""
        return self.model_dump(include=set(FIELDS))
