"""
SQLAlchemy-backed resolution ledger.

One row per domain (lowercased, unique). Uses TXSHIELD_LEDGER_DB_URL when set;
otherwise a SQLite file (TXSHIELD_LEDGER_DB_PATH or txshield_ledger.db).
Storage failures surface as LedgerError.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import Column, Integer, String, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from txshield.config.env import get_ledger_db_url
from txshield.core.exceptions import LedgerError
from txshield.ledger.base import DomainResolutionLedger, normalize_key
from txshield.ledger.models import ResolvedDomainEntry
from txshield.shield_logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


class ResolvedDomain(Base):
    """Last resolution of a domain; replaced in place on every save."""

    __tablename__ = "resolved_domains"

    id = Column(Integer, primary_key=True, autoincrement=True)
    domain = Column(String(255), unique=True, nullable=False, index=True)
    address = Column(String(128), nullable=False)
    chain_id = Column(String(64), nullable=False, default="")
    timestamp = Column(Integer, nullable=False)  # Unix

    def to_entry(self) -> ResolvedDomainEntry:
        return ResolvedDomainEntry(
            domain=self.domain,
            address=self.address,
            chain_id=self.chain_id or "",
            timestamp=self.timestamp,
        )


def _redact_url(url: str) -> str:
    return url.split("?")[0].split("//")[-1]


class SqlResolutionLedger(DomainResolutionLedger):
    """Ledger stored in a `resolved_domains` table."""

    def __init__(self, db_url: str | None = None, *, engine: Any = None) -> None:
        self._url = db_url or get_ledger_db_url()
        if engine is None:
            connect_args = {}
            if self._url.startswith("sqlite"):
                connect_args["check_same_thread"] = False
            engine = create_engine(self._url, connect_args=connect_args, pool_pre_ping=True)
        self._engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        self.init_db()

    def init_db(self) -> None:
        """Create the table if it does not exist. Safe to call repeatedly."""
        try:
            Base.metadata.create_all(bind=self._engine)
        except SQLAlchemyError as e:
            raise LedgerError("init", str(e)) from e
        logger.info("ledger_init_db", url=_redact_url(self._url))

    @contextmanager
    def _session_scope(self, operation: str) -> Iterator[Session]:
        """Single session; commits on success, rolls back and raises LedgerError on failure."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning("ledger_operation_failed", operation=operation, error=str(e))
            raise LedgerError(operation, str(e)) from e
        finally:
            session.close()

    def get_all(self) -> dict[str, str]:
        with self._session_scope("get_all") as session:
            rows = session.query(ResolvedDomain).order_by(ResolvedDomain.id).all()
            return {row.domain: row.address for row in rows}

    def get_entry(self, domain: str) -> ResolvedDomainEntry | None:
        key = normalize_key(domain)
        if not key:
            return None
        with self._session_scope("get_entry") as session:
            row = session.query(ResolvedDomain).filter(ResolvedDomain.domain == key).first()
            return row.to_entry() if row else None

    def save(self, domain: str, address: str, chain_id: str) -> None:
        key = normalize_key(domain)
        if not key:
            return
        now = int(time.time())
        with self._session_scope("save") as session:
            row = session.query(ResolvedDomain).filter(ResolvedDomain.domain == key).first()
            if row is None:
                session.add(
                    ResolvedDomain(
                        domain=key,
                        address=normalize_key(address),
                        chain_id=chain_id or "",
                        timestamp=now,
                    )
                )
            else:
                row.address = normalize_key(address)
                row.chain_id = chain_id or ""
                row.timestamp = now
        logger.info("ledger_saved", domain=key, chain_id=chain_id)

    def clear(self) -> None:
        with self._session_scope("clear") as session:
            session.query(ResolvedDomain).delete()
        logger.info("ledger_cleared")
