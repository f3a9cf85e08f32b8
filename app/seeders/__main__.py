import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import configure_logging
from app.db.engine_sync import create_sync_db_and_tables, sync_engine
from app.seeders import run_all_seeders

logger = logging.getLogger("app.seeders")


def main() -> int:
    configure_logging()
    try:
        create_sync_db_and_tables()
        run_all_seeders(sync_engine)
    except (LookupError, SQLAlchemyError) as e:
        logger.critical(f"❌ Error ejecutando seeders: {e}")
        return 1
    finally:
        sync_engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
