from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Largest value a SQLite INTEGER column holds.
MAX_INT = 2**63 - 1


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value.astimezone(timezone.utc)


# Stored timestamps are naive UTC; responses carry the offset.
UtcDateTime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    """JSON uses camelCase keys; snake_case is accepted on input as well."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageResponse(BaseModel):
    message: str


def reject_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value
