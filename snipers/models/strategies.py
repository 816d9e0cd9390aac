from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, Text

from snipers.core.database import Base, utcnow


class Strategy(Base):
    __tablename__ = "strategies"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(64), nullable=False)  # OPTION, FUTURE...
    max_drawdown = Column(Float, default=0, nullable=False)
    margin = Column(Float, default=0, nullable=False)
    config = Column(JSON, nullable=True)  # instruments, startTime, endTime, segmentType, strategyType
    is_deployed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)


STRATEGY_MUTABLE_FIELDS = frozenset(
    {"name", "description", "type", "max_drawdown", "margin", "config", "is_deployed"}
)
