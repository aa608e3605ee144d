# app/schemas/transaction.py
import math
import re
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

DEFAULT_CATEGORY = "uncategorized"
MISSING_FIELDS_ERROR = "Missing required fields: amount, description, and type are required"

# Longest numeric prefix, e.g. "12.5abc" -> "12.5"
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class TransactionType(str, Enum):
    income = "income"
    expense = "expense"


class CandidateError(ValueError):
    """A create payload that cannot be stored."""


class TransactionCandidate(BaseModel):
    """Raw create payload, exactly as the client sent it."""
    model_config = ConfigDict(extra="ignore")

    amount: Any = None
    description: Any = None
    category: Any = None
    type: Any = None
    date: Any = None


class TransactionCreate(BaseModel):
    amount: float
    description: str
    category: str = DEFAULT_CATEGORY
    type: str
    date: str


class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    amount: float
    description: str
    category: str
    type: str
    date: Optional[str] = None
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"), serialization_alias="createdAt"
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"), serialization_alias="updatedAt"
    )


class TransactionEnvelope(BaseModel):
    success: bool = True
    data: TransactionRead


class TransactionListEnvelope(BaseModel):
    success: bool = True
    data: List[TransactionRead]


def coerce_amount(value: Any) -> float:
    """Parse the leading number of ``value``; anything non-numeric is 0.0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    else:
        match = _NUMBER_PREFIX.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(1))
    return number if math.isfinite(number) else 0.0


def iso_now(now: Optional[datetime] = None) -> str:
    """ISO 8601 timestamp with millisecond precision and a ``Z`` suffix."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_transaction(candidate: TransactionCandidate, strict: bool = False) -> TransactionCreate:
    """Validate a candidate and fill in the defaults.

    ``amount``, ``description`` and ``type`` must all be present and truthy.
    ``amount`` is coerced to a number and ``category``/``date`` get their
    defaults. In strict mode a non-numeric or non-positive amount and a type
    outside income/expense are rejected as well.
    """
    if not candidate.amount or not candidate.description or not candidate.type:
        raise CandidateError(MISSING_FIELDS_ERROR)

    amount = coerce_amount(candidate.amount)
    kind = str(candidate.type)

    if strict:
        if amount <= 0:
            raise CandidateError("Invalid amount: must be a positive number")
        if kind not in {t.value for t in TransactionType}:
            raise CandidateError("Invalid type: must be 'income' or 'expense'")

    return TransactionCreate(
        amount=amount,
        description=str(candidate.description),
        category=str(candidate.category) if candidate.category else DEFAULT_CATEGORY,
        type=kind,
        date=str(candidate.date) if candidate.date else iso_now(),
    )
