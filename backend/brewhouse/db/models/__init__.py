# brewhouse/db/models/__init__.py

from brewhouse.db.session import Base  # noqa: F401

from brewhouse.db.models.tank import Tank, TemperatureReading  # noqa: F401
from brewhouse.db.models.brew_style import BrewStyle  # noqa: F401
from brewhouse.db.models.production_schedule import ProductionSchedule  # noqa: F401
from brewhouse.db.models.alarm import Alarm  # noqa: F401
from brewhouse.db.models.system_status import SystemStatus  # noqa: F401
from brewhouse.db.models.cleaning_schedule import CleaningSchedule  # noqa: F401
from brewhouse.db.models.app_settings import AppSettings  # noqa: F401
