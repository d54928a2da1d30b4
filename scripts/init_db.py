"""Create the configured MySQL database and apply database/schema.sql."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "congregation"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from congregation.database.bootstrap import apply_schema, list_tables
from congregation.main import SCHEMA_PATH, configure_logging

log = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = dict(settings.DB_CONFIG)
    apply_schema(db_config, schema_path=SCHEMA_PATH)
    log.info("tables: %s", ", ".join(list_tables(db_config)))


if __name__ == "__main__":
    main()
