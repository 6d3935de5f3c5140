import logging
import sys
from typing import Union


def resolve_level(level: Union[int, str]) -> int:
    """Maps a level name such as 'debug' onto its logging constant, defaulting to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(name: str = "receipt_extractor", level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Returns the named project logger, writing to stdout.

    Parsers, the lexicon and the categorizer log their per-step decisions at
    DEBUG; the pipeline logs each extracted receipt and every remembered
    correction at INFO. Calling this again only changes the level, which is
    how `ExtractionPipeline.from_settings` applies RECEIPT_LOG_LEVEL.

    Args:
        name: Logger name.
        level: Level constant or name such as "debug". Unknown names mean INFO.
    """
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))

    # Already configured: only the level changes
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


# Default logger for the project
logger = setup_logging()
