"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_DISPLAY_TIMEZONE = "Europe/Paris"
DEFAULT_LOCATION_TIMEOUT_SECONDS = 10.0

DISPLAY_DATE_FORMAT = "%d/%m/%Y"
DISPLAY_TIME_FORMAT = "%H:%M:%S"
DISPLAY_DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"

MIN_ROTATIONS = 1
# rotation_records.rotations is a signed INT
MAX_ROTATIONS = 2147483647

# VARCHAR widths in database/schema.sql
NAME_MAX_LEN = 150
HOTEL_MAX_LEN = 150
PHONE_MAX_LEN = 50
MATRICULE_MAX_LEN = 50

EVENTS_EXPORT_PREFIX = "pointages"
ROTATIONS_EXPORT_PREFIX = "pointages_bus"

OSM_URL_TEMPLATE = "https://www.openstreetmap.org/?mlat={lat}&mlon={lng}#map=17/{lat}/{lng}"
