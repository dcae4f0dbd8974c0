import os
import pathlib


BASE_DIR = pathlib.Path(".").parent.absolute()
LOG_DIR = os.getenv("LOG_DIR", os.path.join(BASE_DIR, "logs"))

EARTH_RADIUS_MILES = 3959
LOCATION_STALE_THRESHOLD_MINUTES = int(os.getenv("LOCATION_STALE_THRESHOLD_MINUTES", 15))
DEFAULT_SEARCH_RADIUS_MILES = float(os.getenv("DEFAULT_SEARCH_RADIUS_MILES", 50))

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters":{
        "verbose": {"format": "%(asctime)s %(levelname)s %(filename)s:%(lineno)d  %(message)s"},
        "simple": {"format": "%(levelname)s [%(name)s] %(message)s"}
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
        "app": {
            "level": "DEBUG",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "formatter": "verbose",
            "filename": os.path.join(LOG_DIR, "app.log"),
            "when": "W4",
            "interval": 1,
            "backupCount": 7,
            "delay": True,
        },
    },
    "loggers": {
        "uvicorn.access": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False
        },
        "app":{
            "handlers": ["app", "console"],
            "level": "DEBUG",
            "propagate": False
        }
    },
}
