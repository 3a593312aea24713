from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables, missing_tables
from .database.connection import DBConfig
from .employees.cli import register as register_punch_cli
from .employees.controller import register as register_employees
from .employees.model import Location
from .employees.punch import FixedLocationProvider
from .profiles.store import JsonFileProfileStore
from .reports.controller import register as register_reports
from .rotations.controller import register as register_rotations

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _kiosk_location(settings) -> Optional[FixedLocationProvider]:
    lat = getattr(settings, "KIOSK_LATITUDE", None)
    lng = getattr(settings, "KIOSK_LONGITUDE", None)
    if lat is None or lng is None:
        return None
    return FixedLocationProvider(Location(latitude=float(lat), longitude=float(lng)))


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "[pointage] settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe()
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            tables = list_tables(db_config)
            missing = missing_tables(tables)
            if missing:
                app.logger.warning("[pointage] schema applied but tables missing: %s", ", ".join(missing))
            else:
                app.logger.info("[pointage] schema ready (tables=%d)", len(tables))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            app.logger.info("[pointage] demo seed ready")

        container = build_container(
            db_config=db_config,
            display_timezone=getattr(settings, "DISPLAY_TIMEZONE"),
            export_with_bom=bool(getattr(settings, "EXPORT_WITH_BOM", True)),
            location_timeout=float(getattr(settings, "LOCATION_TIMEOUT_SECONDS")),
        )

    register_rotations(app, container)
    register_employees(app, container)
    register_reports(app, container)
    register_punch_cli(
        app,
        container,
        profiles=JsonFileProfileStore(getattr(settings, "PROFILE_STORE_PATH")),
        locations=_kiosk_location(settings),
    )

    return app
