import logging
import sys

from core.environment import get_log_level

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


# Logging configuration
def setup_logging(level=None):
    """Configure application logging"""
    log_level = getattr(logging, level or get_log_level())

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )

    logger = logging.getLogger('heatpump_sizing')
    logger.setLevel(log_level)

    return logger
