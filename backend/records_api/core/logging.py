"""
Logging setup shared by the API process.
"""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with a single console handler.

    Does nothing if the root logger already has handlers (uvicorn --log-config,
    pytest's capture handler), so it is safe to call from the app lifespan.
    """
    level_value = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level_value, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    # pymongo is chatty at DEBUG (topology/heartbeat events)
    logging.getLogger("pymongo").setLevel(max(level_value, logging.INFO))
