import logging

from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker, declarative_base

from app.config import settings

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def register_models() -> list[str]:
    """Import every model so its table is on Base.metadata. Returns the table names."""
    import app.models  # noqa: F401

    return sorted(Base.metadata.tables.keys())


def missing_tables() -> list[str]:
    existing = set(inspect(engine).get_table_names())
    return [name for name in register_models() if name not in existing]


def init_db():
    tables = register_models()
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialized (%d tables)", len(tables))
    except Exception as e:
        logger.exception("Database initialization failed: %s", e)
        raise


def ensure_tables_exist() -> list[str]:
    """Create the tables that are missing and leave existing ones alone. Returns the created names."""
    try:
        missing = missing_tables()
        if not missing:
            logger.info("All %d tables already exist", len(Base.metadata.tables))
            return []
        Base.metadata.create_all(bind=engine, tables=[Base.metadata.tables[name] for name in missing])
        logger.info("Created missing tables: %s", ", ".join(missing))
        return missing
    except Exception as e:
        logger.exception("Ensure tables failed: %s", e)
        raise
