from snipers.models.auth import User
from snipers.models.strategies import STRATEGY_MUTABLE_FIELDS, Strategy
from snipers.models.positions import POSITION_MUTABLE_FIELDS, Position, PositionType
from snipers.models.portfolio import PortfolioSnapshot

__all__ = [
    "User",
    "Strategy",
    "STRATEGY_MUTABLE_FIELDS",
    "Position",
    "PositionType",
    "POSITION_MUTABLE_FIELDS",
    "PortfolioSnapshot",
]
