"""Storage seam used by the stores.

Stores only talk to a ``Repository``; which engine sits behind it is decided
once, when the application is assembled.
"""

from typing import Callable, Dict, Generic, List, Optional, Type, TypeVar
import logging

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, select

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=SQLModel)


class Repository(Generic[RecordT]):
    """Collection of records keyed by their ``id``."""

    def add(self, record: RecordT) -> RecordT:
        raise NotImplementedError

    def get(self, record_id: str) -> Optional[RecordT]:
        raise NotImplementedError

    def all(self) -> List[RecordT]:
        """Return every record in insertion order."""
        raise NotImplementedError

    def save(self, record: RecordT) -> RecordT:
        """Persist changes made to a record returned by this repository."""
        raise NotImplementedError

    def remove(self, record_id: str) -> Optional[RecordT]:
        raise NotImplementedError

    def find(self, predicate: Callable[[RecordT], bool]) -> List[RecordT]:
        return [record for record in self.all() if predicate(record)]

    def first(self, predicate: Callable[[RecordT], bool]) -> Optional[RecordT]:
        for record in self.all():
            if predicate(record):
                return record
        return None


class InMemoryRepository(Repository[RecordT]):
    """Process-local storage. Everything is lost on restart."""

    def __init__(self):
        # dicts keep insertion order
        self._records: Dict[str, RecordT] = {}

    def add(self, record: RecordT) -> RecordT:
        self._records[record.id] = record
        return record

    def get(self, record_id: str) -> Optional[RecordT]:
        return self._records.get(record_id)

    def all(self) -> List[RecordT]:
        return list(self._records.values())

    def save(self, record: RecordT) -> RecordT:
        self._records[record.id] = record
        return record

    def remove(self, record_id: str) -> Optional[RecordT]:
        return self._records.pop(record_id, None)

    def __len__(self) -> int:
        return len(self._records)


class SqlRepository(Repository[RecordT]):
    """SQLModel-backed storage for one table."""

    def __init__(self, model: Type[RecordT], engine: Engine):
        self.model = model
        self.engine = engine

    def _session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    def add(self, record: RecordT) -> RecordT:
        with self._session() as session:
            session.add(record)
            session.commit()
            session.refresh(record)
        return record

    def get(self, record_id: str) -> Optional[RecordT]:
        with self._session() as session:
            return session.get(self.model, record_id)

    def all(self) -> List[RecordT]:
        with self._session() as session:
            statement = select(self.model).order_by(self.model.created_at)
            return list(session.exec(statement).all())

    def save(self, record: RecordT) -> RecordT:
        with self._session() as session:
            merged = session.merge(record)
            session.commit()
            session.refresh(merged)
            return merged

    def remove(self, record_id: str) -> Optional[RecordT]:
        with self._session() as session:
            record = session.get(self.model, record_id)
            if record is None:
                return None
            session.delete(record)
            session.commit()
            return record
