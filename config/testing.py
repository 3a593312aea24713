import os

from config.config import *  # noqa: F401,F403
from config.config import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345")

DEBUG = False
TESTING = True

DISPLAY_TIMEZONE = "Europe/Paris"
PROFILE_STORE_PATH = os.path.join(os.getcwd(), ".pytest_profile.json")

# Punch locations come from --lat/--lng in tests
KIOSK_LATITUDE = None
KIOSK_LONGITUDE = None

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
