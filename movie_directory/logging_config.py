"""
Console logging setup (loguru).
"""

import sys

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def configure_logging(level: str = "INFO") -> None:
	"""Replace loguru's default sink with a single stderr sink at the given level."""
	logger.remove()  # drop the default handler so levels are not duplicated
	logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
	logger.debug(f"[Logging] Configured at level {level.upper()}")
