"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from src.sales_report.runtime.config.config_data import ConfigData
from src.sales_report.runtime.context import get_config


def build_engine(config: ConfigData) -> Engine:
    """Create the shared engine with backend-specific pool and connect options."""
    db_config = config.database
    engine_kwargs = {
        "pool_pre_ping": True,  # Validate connections before use
        "echo": False,
        "connect_args": _get_connect_args(config),
    }

    if db_config.is_sqlite:
        # SQLite pools (Singleton/Static/Queue) don't all accept sizing arguments
        if config.app.environment == "production":
            logger.warning(
                "SQLite is not recommended for production use. "
                "Consider PostgreSQL for better performance and reliability."
            )
    else:
        engine_kwargs.update(
            {
                "pool_size": db_config.pool_size,
                "max_overflow": db_config.max_overflow,
                "pool_timeout": db_config.pool_timeout,
                "pool_recycle": db_config.pool_recycle,
            }
        )

    logger.info("Initializing database engine for {}", db_config.url.split("://", 1)[0])
    return create_engine(db_config.connection_string, **engine_kwargs)


def _get_connect_args(config: ConfigData) -> dict:
    """Get database-specific connection arguments."""
    if config.database.is_sqlite:
        return {
            "check_same_thread": False,  # Sessions are used from the threadpool
            "timeout": 20,  # Lock timeout
        }
    if "postgresql" in config.database.url:
        return {
            "application_name": f"{config.app.environment}_sales_report",
            "connect_timeout": 30,
        }
    return {}


class DbSessionService:
    def __init__(self, engine: Engine | None = None):
        """Initialize the shared database engine and session factory."""
        if engine is None:
            logger.info("Setting up database engine and session factory")
            engine = build_engine(get_config())
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Run a block in one transaction: commit on success, roll back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction rolled back: {}: {}", type(e).__name__, e
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error("Database health check failed: {}: {}", type(e).__name__, e)
            return False

    def dispose(self) -> None:
        self._engine.dispose()
