from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from attendance_tracker.database.bootstrap import ensure_demo_data
from attendance_tracker.settings import get_settings_module

logger = logging.getLogger("seed_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_data(db_config)
    logger.info("Seeded %s", db_config.get("database"))


if __name__ == "__main__":
    main()
