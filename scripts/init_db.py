from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from payroll_engine.database.bootstrap import apply_schema, list_tables
from payroll_engine.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(settings.DB_CONFIG)
    conn = DatabaseConnection(config)

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(conn, schema_path=schema_path)
    tables = list_tables(conn)
    print(
        "OK: Applied schema.sql -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
