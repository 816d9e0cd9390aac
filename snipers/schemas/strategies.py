from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from snipers.schemas.common import CamelModel, UtcDateTime, reject_null


class StrategyCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: str = Field(..., min_length=1, max_length=64)
    max_drawdown: float = 0
    margin: float = 0
    config: Optional[Dict[str, Any]] = None
    is_deployed: bool = False


class StrategyUpdate(CamelModel):
    """Mutable strategy fields; anything else in the body is ignored.

    ``description`` and ``config`` may be cleared with null.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[str] = Field(None, min_length=1, max_length=64)
    max_drawdown: Optional[float] = None
    margin: Optional[float] = None
    config: Optional[Dict[str, Any]] = None
    is_deployed: Optional[bool] = None

    non_nullable = field_validator("name", "type", "max_drawdown", "margin", "is_deployed", mode="before")(reject_null)


class StrategyResponse(CamelModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    type: str
    max_drawdown: float
    margin: float
    config: Optional[Dict[str, Any]] = None
    is_deployed: bool
    created_at: UtcDateTime
