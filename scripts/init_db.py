from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from attendance_compliance.database.bootstrap import apply_schema
from attendance_compliance.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db = DBConfig.from_mapping(settings.DB_CONFIG)

    count = apply_schema(DatabaseConnection.get_instance(db), schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"OK: Applied schema.sql -> {db.user}@{db.host}:{db.port}/{db.database} (statements={count})")


if __name__ == "__main__":
    main()
