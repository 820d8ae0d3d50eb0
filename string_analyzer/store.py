"""Record store for analyzed strings, backed by a SQLite file.

Every mutation commits before returning. Mutations are serialized behind
``write_lock``; callers that need a check-then-create step to be atomic hold
the same lock around both calls.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from string_analyzer.database import Base, create_sqlite_engine
from string_analyzer.exceptions import StoreNotInitializedError, StringAlreadyExistsError
from string_analyzer.models import StringAnalysis
from string_analyzer.schemas import StringProperties, StringRecord

logger = logging.getLogger(__name__)


def _to_record(row: StringAnalysis) -> StringRecord:
    return StringRecord(
        id=row.id,
        value=row.value,
        properties=StringProperties(
            length=row.length,
            is_palindrome=row.is_palindrome,
            unique_characters=row.unique_characters,
            word_count=row.word_count,
            sha256_hash=row.sha256_hash,
            character_frequency_map=row.character_frequency_map,
        ),
        created_at=row.created_at,
    )


def _to_row(record: StringRecord) -> StringAnalysis:
    props = record.properties
    return StringAnalysis(
        id=record.id,
        value=record.value,
        length=props.length,
        is_palindrome=props.is_palindrome,
        unique_characters=props.unique_characters,
        word_count=props.word_count,
        sha256_hash=props.sha256_hash,
        character_frequency_map=dict(props.character_frequency_map),
        created_at=record.created_at.isoformat(),
    )


class StringStore:
    def __init__(self):
        self.location: Optional[str] = None
        self.write_lock = threading.RLock()
        self._engine = None
        self._session_factory = None

    def init(self, location: str) -> None:
        """Open (creating if absent) the store at `location`."""
        self._engine = create_sqlite_engine(location)
        Base.metadata.create_all(bind=self._engine)
        self._session_factory = sessionmaker(autoflush=False, bind=self._engine)
        self.location = location
        logger.info(f"String store ready at {location}")

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info(f"String store at {self.location} closed")
        self._engine = None
        self._session_factory = None

    @property
    def initialized(self) -> bool:
        return self._session_factory is not None

    @contextmanager
    def _session(self) -> Iterator[Session]:
        if self._session_factory is None:
            raise StoreNotInitializedError()
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def find_by_id(self, string_id: str) -> Optional[StringRecord]:
        """Get record by ID (hash)"""
        with self._session() as db:
            row = db.query(StringAnalysis).filter(StringAnalysis.id == string_id).first()
            return _to_record(row) if row else None

    def find_by_value(self, value: str) -> Optional[StringRecord]:
        """Get record by raw value"""
        with self._session() as db:
            row = db.query(StringAnalysis).filter(StringAnalysis.value == value).first()
            return _to_record(row) if row else None

    def create(self, record: StringRecord) -> StringRecord:
        """Persist a new record; uniqueness is checked by the caller"""
        with self.write_lock, self._session() as db:
            db.add(_to_row(record))
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise StringAlreadyExistsError() from e
        logger.info(f"Stored string {record.id}")
        return record

    def delete_by_id(self, string_id: str) -> bool:
        """Delete record by ID; returns whether a record was removed"""
        with self.write_lock, self._session() as db:
            deleted = db.query(StringAnalysis).filter(StringAnalysis.id == string_id).delete()
            db.commit()
        if deleted:
            logger.info(f"Deleted string {string_id}")
        return deleted > 0

    def all(self) -> List[StringRecord]:
        """Every stored record, in insertion order"""
        with self._session() as db:
            rows = db.query(StringAnalysis).order_by(text("strings.rowid")).all()
            return [_to_record(row) for row in rows]
