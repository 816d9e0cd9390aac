from contextlib import AbstractContextManager
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from snipers.core.database import EntityStore
from snipers.core.errors import ConflictError
from snipers.models import (
    POSITION_MUTABLE_FIELDS,
    STRATEGY_MUTABLE_FIELDS,
    PortfolioSnapshot,
    Position,
    Strategy,
    User,
)

DEFAULT_HISTORY_LIMIT = 30


class Repository:
    """Data-access boundary used by the route layer.

    Lookups return ``None`` (or an empty list) when nothing matches; turning
    absence into an HTTP error is the caller's job.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def atomic(self) -> AbstractContextManager:
        return self.store.locked()

    # Users
    def get_user(self, user_id: int) -> Optional[User]:
        return self.store.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        matches = self.store.list_where(User, User.username == username, limit=1)
        return matches[0] if matches else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        # Exact match as stored, no case folding.
        matches = self.store.list_where(User, User.email == email, limit=1)
        return matches[0] if matches else None

    def create_user(self, **fields: Any) -> User:
        try:
            return self.store.insert(User, **fields)
        except IntegrityError as exc:
            raise ConflictError("User with this email or username already exists") from exc

    def count_users(self) -> int:
        return self.store.count(User)

    # Strategies
    def get_strategies(self, user_id: int) -> List[Strategy]:
        return self.store.list_where(Strategy, Strategy.user_id == user_id, order_by=[Strategy.id])

    def get_deployed_strategies(self, user_id: int) -> List[Strategy]:
        return self.store.list_where(
            Strategy,
            Strategy.user_id == user_id,
            Strategy.is_deployed.is_(True),
            order_by=[Strategy.id],
        )

    def get_strategy(self, strategy_id: int) -> Optional[Strategy]:
        return self.store.get(Strategy, strategy_id)

    def create_strategy(self, user_id: int, **fields: Any) -> Strategy:
        return self.store.insert(Strategy, user_id=user_id, **fields)

    def update_strategy(self, strategy_id: int, fields: Dict[str, Any]) -> Optional[Strategy]:
        return self.store.update(Strategy, strategy_id, fields, STRATEGY_MUTABLE_FIELDS)

    def delete_strategy(self, strategy_id: int) -> bool:
        return self.store.delete(Strategy, strategy_id)

    # Positions
    def get_positions(self, user_id: int) -> List[Position]:
        return self.store.list_where(Position, Position.user_id == user_id, order_by=[Position.id])

    def get_position(self, position_id: int) -> Optional[Position]:
        return self.store.get(Position, position_id)

    def create_position(self, user_id: int, **fields: Any) -> Position:
        return self.store.insert(Position, user_id=user_id, **fields)

    def update_position(self, position_id: int, fields: Dict[str, Any]) -> Optional[Position]:
        return self.store.update(Position, position_id, fields, POSITION_MUTABLE_FIELDS)

    def delete_position(self, position_id: int) -> bool:
        return self.store.delete(Position, position_id)

    # Portfolio
    def get_portfolio_snapshots(self, user_id: int, limit: int = DEFAULT_HISTORY_LIMIT) -> List[PortfolioSnapshot]:
        if limit <= 0:
            return []
        return self.store.list_where(
            PortfolioSnapshot,
            PortfolioSnapshot.user_id == user_id,
            order_by=[PortfolioSnapshot.timestamp.desc(), PortfolioSnapshot.id.desc()],
            limit=limit,
        )

    def get_latest_portfolio_snapshot(self, user_id: int) -> Optional[PortfolioSnapshot]:
        snapshots = self.get_portfolio_snapshots(user_id, limit=1)
        return snapshots[0] if snapshots else None

    def create_portfolio_snapshot(self, user_id: int, **fields: Any) -> PortfolioSnapshot:
        # Capture time is always assigned here, never taken from the caller.
        fields.pop("timestamp", None)
        return self.store.insert(PortfolioSnapshot, user_id=user_id, **fields)
