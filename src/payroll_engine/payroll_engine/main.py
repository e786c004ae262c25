from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_container() -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG")
    logger.debug(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        conn = DatabaseConnection(DBConfig.from_mapping(db_config))
        apply_schema(conn, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(conn)))

    return build_container(
        db_config=db_config,
        gateway_config=getattr(settings, "PAYMENT_GATEWAY"),
        currency=getattr(settings, "PAYROLL_CURRENCY", "kes"),
        minimum_wage=getattr(settings, "MINIMUM_WAGE", "15000"),
        standard_working_hours=getattr(settings, "STANDARD_WORKING_HOURS", "160"),
        store_notifications=bool(getattr(settings, "STORE_NOTIFICATIONS", True)),
    )
