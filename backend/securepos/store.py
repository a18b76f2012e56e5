"""
Record Store — Persistence provider for the ledger core.

Every operation opens its own short transaction unless the caller passes a
session (``db=``) to join. There is no read cache, so each lookup hits the
database. Atomicity for concurrent writers, including writers in other
processes, is delegated to the database: ``compare_and_insert`` relies on
primary-key / unique constraints, ``cas_update`` and ``delete_where`` on a
conditional ``UPDATE/DELETE ... WHERE``, and ``write_session`` takes the
database write lock before the first read.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Optional

from sqlalchemy import select, update, delete, func, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


class RecordStore:
    """Thin transactional wrapper around a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @contextmanager
    def write_session(self) -> Iterator[Session]:
        """Session that holds the database write lock from its first statement.

        On SQLite this is ``BEGIN IMMEDIATE``: writers in every process queue
        behind it until commit. Other dialects lock rows with ``lock_rows``.
        """
        with self.session() as db:
            if db.get_bind().dialect.name == "sqlite":
                db.execute(text("BEGIN IMMEDIATE"))
            yield db

    @contextmanager
    def _using(self, db: Optional[Session]) -> Iterator[Session]:
        if db is not None:
            yield db
        else:
            with self.session() as own:
                yield own

    # ─── Writes ─────────────────────────────────────────────────────────

    def compare_and_insert(self, obj: Any) -> bool:
        """Insert ``obj`` unless a row with the same unique key already exists.

        Returns:
            True if the row was inserted, False if a constraint rejected it.
        """
        try:
            with self.session() as db:
                db.add(obj)
        except IntegrityError:
            logger.debug("compare_and_insert rejected %s", type(obj).__name__)
            return False
        return True

    def cas_update(
        self,
        model: type,
        key: dict,
        expected: dict,
        values: dict,
        guard: Iterable = (),
        db: Optional[Session] = None,
    ) -> bool:
        """Apply ``values`` to the row matching ``key`` only if it still holds ``expected``
        and every extra ``guard`` clause is true.

        Returns:
            True if exactly one row was updated.
        """
        criteria = [getattr(model, col) == val for col, val in {**key, **expected}.items()]
        stmt = (
            update(model)
            .where(*criteria, *guard)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        with self._using(db) as session:
            return session.execute(stmt).rowcount == 1

    def delete_where(
        self,
        model: type,
        key: dict,
        guard: Iterable = (),
        db: Optional[Session] = None,
    ) -> bool:
        """Delete the row matching ``key`` only if every ``guard`` clause is true.

        Returns:
            True if exactly one row was deleted.
        """
        criteria = [getattr(model, col) == val for col, val in key.items()]
        stmt = delete(model).where(*criteria, *guard).execution_options(synchronize_session=False)
        with self._using(db) as session:
            return session.execute(stmt).rowcount == 1

    def append(self, obj: Any, db: Optional[Session] = None) -> Any:
        """Unconditional insert for append-only logs; returns the persisted object."""
        with self._using(db) as session:
            session.add(obj)
            session.flush()
            session.refresh(obj)
        return obj

    def lock_rows(self, db: Session, model: type, **filters):
        """``SELECT ... FOR UPDATE`` on matching rows (a no-op under SQLite's database lock)."""
        db.execute(select(model).filter_by(**filters).with_for_update()).all()

    # ─── Reads ──────────────────────────────────────────────────────────

    def get(self, model: type, pk: Any, db: Optional[Session] = None) -> Optional[Any]:
        with self._using(db) as session:
            return session.get(model, pk)

    def first(self, model: type, **filters) -> Optional[Any]:
        with self.session() as db:
            return db.execute(select(model).filter_by(**filters).limit(1)).scalars().first()

    def all(self, model: type, *order_by, **filters) -> list:
        with self.session() as db:
            stmt = select(model).filter_by(**filters)
            if order_by:
                stmt = stmt.order_by(*order_by)
            return list(db.execute(stmt).scalars().all())

    def count(self, model: type, db: Optional[Session] = None, **filters) -> int:
        with self._using(db) as session:
            stmt = select(func.count()).select_from(model).filter_by(**filters)
            return session.execute(stmt).scalar() or 0
