import functools
import inspect
import logging
import logging.config
import os
import threading

from utils.constants import LOGGING_CONFIG, LOG_DIR


_configured = False
_configure_lock = threading.Lock()


def _configure():
    global _configured
    if _configured:
        return
    with _configure_lock:
        if _configured:
            return
        os.makedirs(LOG_DIR, exist_ok=True)
        logging.config.dictConfig(LOGGING_CONFIG)
        _configured = True


def createLogger(name="app"):
    """Return a named logger, configuring logging on first use."""
    _configure()
    return logging.getLogger(name)


def exceptionlogs(msg, log="app"):
    """Log an error message together with the active traceback, if any."""
    createLogger(log).error(msg, exc_info=True)


def functionlogs(log="app"):
    """
        Decorator logging entry and exit of a function at debug level.
        :param log: name of the logger to write to
    """
    def decorator(func):
        logger = createLogger(log)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                logger.debug(f"Entering {func.__qualname__}")
                result = await func(*args, **kwargs)
                logger.debug(f"Exiting {func.__qualname__}")
                return result
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger.debug(f"Entering {func.__qualname__}")
            result = func(*args, **kwargs)
            logger.debug(f"Exiting {func.__qualname__}")
            return result
        return wrapper

    return decorator
