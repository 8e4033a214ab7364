from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.firedrill_board.firedrill_board.database.bootstrap import apply_schema, list_tables, missing_tables
from src.firedrill_board.firedrill_board.database.connection import DBConfig


def main() -> int:
    """Create the drill database if needed, apply schema.sql and verify the drill tables."""

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = DBConfig.from_dict(db_config)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    missing = missing_tables(list_tables(db_config))
    if missing:
        print(f"FAIL: {target.label} is missing drill tables: {', '.join(missing)}")
        return 1

    print(f"OK: fire drill schema ready on {target.label}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
