from sqlalchemy import JSON, Column, DateTime, Float, Index, Integer

from snipers.core.database import Base, utcnow


class PortfolioSnapshot(Base):
    __tablename__ = "portfolio_snapshots"
    __table_args__ = (
        Index("ix_portfolio_snapshot_user_ts", "user_id", "timestamp"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False)
    total_value = Column(Float, nullable=False)
    btc_value = Column(Float, nullable=True)
    assets = Column(JSON, nullable=True)  # {"BTC": {"percentage": 6, "value": 245.67}, ...}
    timestamp = Column(DateTime, default=utcnow, nullable=False)
