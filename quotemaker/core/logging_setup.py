import logging
import sys

from quotemaker.config.paths import LOG_FILE_PATH


def setup_logging(level: str = "INFO"):
    LOG_FILE_PATH.parent.mkdir(exist_ok=True, parents=True)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(LOG_FILE_PATH, encoding="utf-8")
        ]
    )
    return logging.getLogger("quotemaker")
