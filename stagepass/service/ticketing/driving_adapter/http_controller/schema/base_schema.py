from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Prices travel as JSON numbers, not the string pydantic uses for Decimal
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used='json')]

# Ids and ticket counts are stored in 32-bit INTEGER columns
MAX_INT32 = 2**31 - 1
RecordId = Annotated[int, Field(gt=0, le=MAX_INT32)]
RecordIdPath = Annotated[int, Path(gt=0, le=MAX_INT32)]


def ensure_utc(value: datetime) -> datetime:
    """Naive times are read as UTC; aware ones are converted to the same instant in UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
