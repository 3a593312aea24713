"""Create the pointage tables (and optionally load the demo rows).

    python scripts/init_db.py [--seed]
"""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.pointage_system.pointage_system.database.connection import DBConfig
from src.pointage_system.pointage_system.database.bootstrap import (
    apply_schema,
    apply_seed_sql,
    list_tables,
    missing_tables,
)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="also load database/seed.sql")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = DBConfig.from_dict(db_config).describe()

    count = apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"OK: schema.sql ({count} statements) -> {target}")

    if args.seed:
        count = apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        print(f"OK: seed.sql ({count} statements)")

    missing = missing_tables(list_tables(db_config))
    if missing:
        print(f"ERREUR: tables absentes: {', '.join(missing)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
