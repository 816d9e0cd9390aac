from contextlib import contextmanager
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Collection, Dict, Generator, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()

ModelT = TypeVar("ModelT")

IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created_at"})


def utcnow() -> datetime:
    """Naive UTC now; SQLite DateTime columns drop tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class EntityStore:
    """In-process keyed storage for every entity kind.

    Each instance owns its own SQLite memory database, so a new store starts
    empty and dropping it discards everything. Ids are issued per table with
    ``AUTOINCREMENT`` and are never reused after a delete.
    """

    def __init__(self, database_url: str = "sqlite://") -> None:
        self.engine = create_engine(
            database_url,
            future=True,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        self._lock = RLock()
        self._session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            future=True,
            expire_on_commit=False,
        )
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def locked(self) -> Generator[None, None, None]:
        """Hold the store lock across several operations (check-then-insert)."""
        with self._lock:
            yield

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Provide a transactional scope around a series of operations.

        The store lock is held for the whole transaction: handlers run on a
        thread pool and the memory database has a single shared connection.
        """
        with self._lock:
            session = self._session_factory()
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def insert(self, model: Type[ModelT], **fields: Any) -> ModelT:
        with self.session_scope() as session:
            record = model(**fields)
            session.add(record)
            session.flush()
            session.refresh(record)
            return record

    def get(self, model: Type[ModelT], record_id: int) -> Optional[ModelT]:
        with self.session_scope() as session:
            return session.get(model, record_id)

    def list_where(
        self,
        model: Type[ModelT],
        *criteria: Any,
        order_by: Sequence[Any] = (),
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        with self.session_scope() as session:
            stmt = select(model).where(*criteria)
            if order_by:
                stmt = stmt.order_by(*order_by)
            if limit is not None:
                stmt = stmt.limit(limit)
            return list(session.execute(stmt).scalars().all())

    def update(
        self,
        model: Type[ModelT],
        record_id: int,
        fields: Dict[str, Any],
        mutable: Collection[str],
    ) -> Optional[ModelT]:
        """Merge ``fields`` over the stored record, limited to ``mutable`` names."""
        with self.session_scope() as session:
            record = session.get(model, record_id)
            if record is None:
                return None
            for key, value in fields.items():
                if key in mutable and key not in IMMUTABLE_FIELDS:
                    setattr(record, key, value)
            session.flush()
            session.refresh(record)
            return record

    def delete(self, model: Type[ModelT], record_id: int) -> bool:
        with self.session_scope() as session:
            record = session.get(model, record_id)
            if record is None:
                return False
            session.delete(record)
            return True

    def count(self, model: Type[Any]) -> int:
        with self.session_scope() as session:
            return session.execute(select(func.count()).select_from(model)).scalar_one()

    def dispose(self) -> None:
        self.engine.dispose()
