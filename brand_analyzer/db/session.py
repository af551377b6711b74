import logging
from contextlib import contextmanager
from typing import Iterator
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from brand_analyzer.models.db_models import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine and session factory for the lifetime of the process."""

    def __init__(self, url: str, statement_timeout_ms: int | None = None,
                 connect_timeout_secs: int | None = None, sslmode: str | None = None):
        self.url = make_url(url)
        engine_kwargs = {"pool_pre_ping": True, "echo": False}
        connect_args = {}
        if self.url.get_backend_name() == "sqlite":
            connect_args["check_same_thread"] = False
            if self.url.database in (None, "", ":memory:"):
                # one shared connection, otherwise every session sees an empty db
                engine_kwargs["poolclass"] = StaticPool
        elif self.url.get_backend_name() == "postgresql":
            if connect_timeout_secs:
                connect_args["connect_timeout"] = connect_timeout_secs
            if statement_timeout_ms:
                connect_args["options"] = f"-c statement_timeout={statement_timeout_ms}"
            if sslmode:
                connect_args["sslmode"] = sslmode
        self.engine = create_engine(self.url, connect_args=connect_args, **engine_kwargs)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False,
                                         autocommit=False, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.database_url(),
            statement_timeout_ms=settings.DB_STATEMENT_TIMEOUT_MS,
            connect_timeout_secs=settings.DB_CONNECT_TIMEOUT_SECS,
            sslmode=settings.DB_SSLMODE,
        )

    def create_all(self):
        Base.metadata.create_all(bind=self.engine)
        logger.info("Connected to %s database", self.url.get_backend_name())

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self):
        self.engine.dispose()
