import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Float, Integer, String

from snipers.core.database import Base, utcnow


class PositionType(str, enum.Enum):
    LONG = "LONG"
    SHORT = "SHORT"


class Position(Base):
    __tablename__ = "positions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    strategy_id = Column(Integer, nullable=True)
    symbol = Column(String(32), nullable=False)
    exchange = Column(String(64), nullable=False)
    value = Column(Float, nullable=False)
    entry_price = Column(Float, nullable=False)
    mark_price = Column(Float, nullable=False)
    unrealized_pnl = Column(Float, default=0, nullable=False)
    unrealized_pnl_percentage = Column(Float, default=0, nullable=False)
    realized_pnl = Column(Float, default=0, nullable=False)
    realized_pnl_percentage = Column(Float, default=0, nullable=False)
    leverage = Column(Integer, default=1, nullable=False)
    position_type = Column(Enum(PositionType, native_enum=False, length=8), nullable=False)
    is_isolated = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)


POSITION_MUTABLE_FIELDS = frozenset(
    {
        "strategy_id",
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
    }
)
