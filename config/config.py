"""Settings shared by every environment module."""
import os


def _env_float(name: str):
    value = os.environ.get(name)
    return float(value) if value not in (None, "") else None


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.environ.get("DB_HOST", "localhost"),
        "port": int(os.environ.get("DB_PORT", "3306")),
        "user": os.environ.get("DB_USER", "root"),
        "password": os.environ.get("DB_PASSWORD", default_password),
        "database": os.environ.get("DB_NAME", "pointage_db"),
        "connect_timeout": int(os.environ.get("DB_CONNECT_TIMEOUT", "5")),
    }


# Calendar days and times shown to admins (and the date filter) use this zone
DISPLAY_TIMEZONE = os.environ.get("DISPLAY_TIMEZONE", "Europe/Paris")

# Excel needs the BOM to read the export as UTF-8
EXPORT_WITH_BOM = bool(int(os.environ.get("EXPORT_WITH_BOM", "1")))

LOCATION_TIMEOUT_SECONDS = float(os.environ.get("LOCATION_TIMEOUT_SECONDS", "10"))

PROFILE_STORE_PATH = os.environ.get(
    "PROFILE_STORE_PATH",
    os.path.join(os.path.expanduser("~"), ".pointage", "profile.json"),
)

KIOSK_LATITUDE = _env_float("KIOSK_LATITUDE")
KIOSK_LONGITUDE = _env_float("KIOSK_LONGITUDE")
