"""Logging functionality for neighborhoods.

It is modeled on the default `logging approach that comes with Python <https://docs.python.org/library/logging.html>`_.

Every module obtains its own child of the ``NEIGHBORHOODS`` root logger
through :func:`create_module_logger`. Nothing is printed unless a handler is
attached, for example with :func:`log_to_stderr`.
"""

import inspect
import logging
from functools import wraps
from logging import DEBUG, INFO

__all__ = [
    "DEBUG",
    "DEFAULT_LEVEL",
    "INFO",
    "LOGGER_NAME",
    "create_module_logger",
    "function_logger",
    "get_module_logger",
    "get_rootlogger",
    "log_to_stderr",
    "method_logger",
]

LOGGER_NAME = "NEIGHBORHOODS"
DEFAULT_LEVEL = DEBUG

_module_loggers: dict[str, logging.Logger] = {}


def create_module_logger(name: str | None = None) -> logging.Logger:
    """Create a module logger.

    Args:
        name: name of the module for which the logger is being created. If
              None, the name of the calling module is used.

    """
    if name is None:
        frm = inspect.stack()[1]
        mod = inspect.getmodule(frm[0])
        name = mod.__name__
    logger = logging.getLogger(f"{LOGGER_NAME}.{name}")

    _module_loggers[name] = logger
    return logger


def get_module_logger(name: str) -> logging.Logger:
    """Get the module logger for the given name, creating it if needed."""
    try:
        return _module_loggers[name]
    except KeyError:
        return create_module_logger(name)


def method_logger(name: str):
    """Decorator for adding debug logging to a method.

    Args:
        name: The name of the module the method is defined in.

    """
    logger = get_module_logger(name)
    classname = inspect.getouterframes(inspect.currentframe())[1][3]

    def real_decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            # the first argument is self, so it is skipped
            logger.debug(
                f"calling {classname}.{func.__name__} with {args[1:]} and {kwargs}"
            )
            return func(*args, **kwargs)

        return wrapper

    return real_decorator


def function_logger(name: str):
    """Decorator for adding debug logging to a function.

    Args:
        name: The name of the module the function is defined in.

    """
    logger = get_module_logger(name)

    def real_decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger.debug(f"calling {func.__name__} with {args} and {kwargs}")
            return func(*args, **kwargs)

        return wrapper

    return real_decorator


def get_rootlogger() -> logging.Logger:
    """Return the root logger of the package."""
    return logging.getLogger(LOGGER_NAME)


def log_to_stderr(level: int | None = None, pass_root_logger_level: bool = False):
    """Log to stderr with the package format.

    Args:
        level: logging level to use, defaults to DEFAULT_LEVEL
        pass_root_logger_level: if True, the root logger level is also
                                applied to all module loggers

    """
    if level is None:
        level = DEFAULT_LEVEL

    logger = get_rootlogger()
    logger.setLevel(level)

    formatter = logging.Formatter(
        "[%(levelname)s] %(name)s %(filename)s:%(lineno)d: %(message)s"
    )
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if pass_root_logger_level:
        for module_logger in _module_loggers.values():
            module_logger.setLevel(level)

    return logger
