# migrate.py
import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("migrate")

ALEMBIC_INI = Path(__file__).resolve().parent / "alembic.ini"


def main(revision: str = "head") -> None:
    """
    Upgrade the database in DATABASE_URL to `revision`.

    Exits with status 1 if any migration fails.
    """
    logger.info("Running migrations up to %s ...", revision)
    try:
        command.upgrade(Config(str(ALEMBIC_INI)), revision)
    except Exception:
        logger.exception("Migration failed")
        sys.exit(1)
    logger.info("Migrations completed.")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "head")
