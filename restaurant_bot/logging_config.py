"""
Logging configuration for the restaurant bot.

Usage:
    from restaurant_bot.logging_config import setup_logging
    setup_logging()  # once, before the app is created

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)

Customer phone numbers are personal data. Log lines above DEBUG identify a
conversation by its id or by ``mask_address(...)``, never by the full number.
"""
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HTTP and SQL traces carry prompts, message bodies and phone numbers
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "sqlalchemy.engine")


def mask_address(address: str) -> str:
    """Hide the middle of a channel address: '+5511999990000' -> '+551******0000'."""
    if not address:
        return "<unknown>"
    if len(address) <= 8:
        return "*" * len(address)
    return f"{address[:4]}{'*' * (len(address) - 8)}{address[-4:]}"


def setup_logging(level: str = None) -> None:
    """Configure the root logger and the ``restaurant_bot`` loggers.

    ``level`` falls back to LOG_LEVEL, then to INFO; unknown names mean INFO.
    """
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    numeric_level = logging.getLevelName(name)
    if not isinstance(numeric_level, int):
        name, numeric_level = "INFO", logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    logging.getLogger("restaurant_bot").setLevel(numeric_level)

    third_party_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(third_party_level)

    logging.getLogger(__name__).debug("Logging configured at %s level", name)
