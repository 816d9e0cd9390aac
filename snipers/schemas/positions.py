from typing import Optional

from pydantic import Field, field_validator

from snipers.models.positions import PositionType
from snipers.schemas.common import MAX_INT, CamelModel, UtcDateTime, reject_null


class PositionCreate(CamelModel):
    strategy_id: Optional[int] = Field(None, ge=1, le=MAX_INT)
    symbol: str = Field(..., min_length=1, max_length=32)
    exchange: str = Field(..., min_length=1, max_length=64)
    value: float
    entry_price: float
    mark_price: float
    unrealized_pnl: float = 0
    unrealized_pnl_percentage: float = 0
    realized_pnl: float = 0
    realized_pnl_percentage: float = 0
    leverage: int = Field(1, ge=1, le=MAX_INT)
    position_type: PositionType
    is_isolated: bool = True


class PositionUpdate(CamelModel):
    strategy_id: Optional[int] = Field(None, ge=1, le=MAX_INT)
    symbol: Optional[str] = Field(None, min_length=1, max_length=32)
    exchange: Optional[str] = Field(None, min_length=1, max_length=64)
    value: Optional[float] = None
    entry_price: Optional[float] = None
    mark_price: Optional[float] = None
    unrealized_pnl: Optional[float] = None
    unrealized_pnl_percentage: Optional[float] = None
    realized_pnl: Optional[float] = None
    realized_pnl_percentage: Optional[float] = None
    leverage: Optional[int] = Field(None, ge=1, le=MAX_INT)
    position_type: Optional[PositionType] = None
    is_isolated: Optional[bool] = None

    non_nullable = field_validator(
        "symbol",
        "exchange",
        "value",
        "entry_price",
        "mark_price",
        "unrealized_pnl",
        "unrealized_pnl_percentage",
        "realized_pnl",
        "realized_pnl_percentage",
        "leverage",
        "position_type",
        "is_isolated",
        mode="before",
    )(reject_null)


class PositionResponse(CamelModel):
    id: int
    user_id: int
    strategy_id: Optional[int] = None
    symbol: str
    exchange: str
    value: float
    entry_price: float
    mark_price: float
    unrealized_pnl: float
    unrealized_pnl_percentage: float
    realized_pnl: float
    realized_pnl_percentage: float
    leverage: int
    position_type: PositionType
    is_isolated: bool
    created_at: UtcDateTime
