"""
Logging setup for applications that embed the memory engine.

The library modules only create loggers; handlers are configured here, once,
by the hosting application.
"""

import logging
import sys
from typing import Optional

from chauffeur_memory.config import MemorySettings


def setup_logging(settings: Optional[MemorySettings] = None) -> None:
    """
    Configure the root logger.

    Args:
        settings: MemorySettings instance, a default one is built if None
    """
    if settings is None:
        settings = MemorySettings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # The HTTP clients are chatty at INFO.
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
