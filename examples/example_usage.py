"""Example: use the service layer directly (without Flask).

Controllers stay thin; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.pointage_system.pointage_system.container import build_container
from src.pointage_system.pointage_system.rotations.model import RotationQuery


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, display_timezone=settings.DISPLAY_TIMEZONE)

    overview = container.report_service.rotation_overview(RotationQuery(search="ibis"))
    print(overview.summary)
    for group in overview.hotels:
        print(group.hotel, group.total_rotations, group.submitter_count)


if __name__ == "__main__":
    main()
