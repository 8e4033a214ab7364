from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.firedrill_board.firedrill_board.core.enums import AdminRole
from src.firedrill_board.firedrill_board.database.bootstrap import apply_seed_sql, ensure_admins
from src.firedrill_board.firedrill_board.database.connection import DBConfig


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load the demo roster and grant board admin rights.")
    parser.add_argument("--admin", action="append", default=[], metavar="EMAIL", help="Grant the admin role")
    parser.add_argument(
        "--super-admin",
        action="append",
        default=[],
        metavar="EMAIL",
        help="Grant the super_admin role (may run resets when RESET_ADMIN_TIER=super_admin)",
    )
    parser.add_argument("--no-demo", action="store_true", help="Only grant roles; skip the demo roster")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    if not args.no_demo:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")

    # FIREDRILL_ADMINS from the environment counts as --admin.
    admins = list(getattr(settings, "BOOTSTRAP_ADMINS", [])) + args.admin
    added = ensure_admins(db_config, admins, role=AdminRole.ADMIN)
    added_super = ensure_admins(db_config, args.super_admin, role=AdminRole.SUPER_ADMIN)

    print(
        f"OK: seeded {DBConfig.from_dict(db_config).label} "
        f"(demo roster={'skipped' if args.no_demo else 'loaded'}, admins added={added}, super admins added={added_super})"
    )


if __name__ == "__main__":
    main()
