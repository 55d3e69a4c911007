"""Logging setup for scripts using tensorplus."""

import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure the root logger.

    Records are written to stdout as "timestamp - logger name - level - message".
    The library never calls this itself; applications and demos do.
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
