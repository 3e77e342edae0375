import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from mybank.core.config import settings


logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "migrations"

engine = create_engine(settings.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def alembic_config(database_url: Optional[str] = None) -> Config:
    # Built in code so installed copies do not depend on alembic.ini
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    url = database_url or settings.database_url
    # ConfigParser interpolation treats % as a directive
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    config.attributes["configure_logger"] = False
    return config


def run_migrations(database_url: Optional[str] = None) -> None:
    """Apply every pending Alembic revision up to head."""
    logger.info("Applying database migrations")
    command.upgrade(alembic_config(database_url), "head")
