import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MAX_AMOUNT = 1_000_000


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError("value_error", message)


class ChargeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    # strict: a JSON number only, no bools or numeric strings
    amount: float = Field(..., strict=True)
    currency: str
    source: str
    email: str

    @field_validator("amount")
    @classmethod
    def check_amount(cls, v):
        if v <= 0:
            raise _invalid("Amount must be positive")
        if v > MAX_AMOUNT:
            raise _invalid("Amount cannot exceed $1,000,000")
        return v

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v):
        if len(v) != 3:
            raise _invalid("Currency must be 3 characters")
        return v.upper()

    @field_validator("source")
    @classmethod
    def check_source(cls, v):
        if not v:
            raise _invalid("Source is required")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        if not EMAIL_RE.match(v):
            raise _invalid("Invalid email format")
        return v
