import os
import sys
from loguru import logger

# The library stays quiet unless the host application opts in
logger.disable("pyjinvoke")

_handler_id = None


def setup_logging(level="INFO", sink=None):
    """
    Enables pyjinvoke log output.

    Safe to call more than once; each call replaces the handler added by the
    previous one.

    Args:
        level: Logging level (default: INFO)
        sink: Where to write records. Defaults to stderr.
    """
    global _handler_id

    if _handler_id is not None:
        logger.remove(_handler_id)

    _handler_id = logger.add(
        sink if sink is not None else sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        filter="pyjinvoke",
        colorize=None if sink is None else False,
    )
    logger.enable("pyjinvoke")
    return _handler_id


def disable_logging():
    global _handler_id

    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None
    logger.disable("pyjinvoke")


_env_level = os.getenv("PYJINVOKE_LOG_LEVEL", "").strip().upper()
if _env_level:
    setup_logging(_env_level)
