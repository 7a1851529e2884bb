from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from designflow.core.constants import DEFAULT_USER_PASSWORD
from designflow.database.bootstrap import apply_schema, ensure_demo_data
from designflow.database.connection import DBConfig


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo users, art types and settings")
    parser.add_argument("--password", default=DEFAULT_USER_PASSWORD, help="password for the demo users")
    parser.add_argument("--skip-schema", action="store_true", help="assume the schema already exists")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    if not args.skip_schema:
        apply_schema(db_config)
    ensure_demo_data(db_config, demo_password=args.password)

    print(f"OK: Seeded database -> {DBConfig.from_mapping(db_config).describe()}")


if __name__ == "__main__":
    main()
