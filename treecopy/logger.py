# treecopy/logger.py
import logging
import sys

LOG_FORMAT = '%(asctime)s [%(name)s] [%(levelname)s] %(message)s'


def setup_app_logger(name="TREECOPY", log_file=None):
    """Returns a named logger, attaching handlers only on the first call."""
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    if logger.handlers: return logger
    formatter = logging.Formatter(LOG_FORMAT)
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(logging.INFO)
    ch.setFormatter(formatter)
    logger.addHandler(ch)
    if log_file:
        fh = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        logger.addHandler(fh)
    return logger
