"""Logging configuration for the indexer command and web app."""
import logging
import os
from logging.handlers import RotatingFileHandler


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Log to the console, and to logs/indexer.log when a logs/ directory exists."""
    handlers: list = [logging.StreamHandler()]
    if os.path.isdir("logs"):
        handlers.append(
            RotatingFileHandler("logs/indexer.log", maxBytes=10 * 1024 * 1024, backupCount=5)
        )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )
    return logging.getLogger("index_engine")
