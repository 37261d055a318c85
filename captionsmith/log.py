"""Minimal logging setup for CaptionSmith — stdlib only."""

import logging


def setup_logging(level='INFO', log_file=None):
    """Configure the 'captionsmith' root logger with console and optional file output."""
    logger = logging.getLogger('captionsmith')
    if not logger.handlers:
        fmt = logging.Formatter('%(asctime)s %(levelname)-8s %(name)s - %(message)s')
        ch = logging.StreamHandler()
        ch.setFormatter(fmt)
        logger.addHandler(ch)
        if log_file:
            fh = logging.FileHandler(log_file)
            fh.setFormatter(fmt)
            logger.addHandler(fh)
    logger.setLevel(level.upper())
    return logger


def get_logger(name):
    """Return a child logger under the 'captionsmith' namespace."""
    if name.startswith('captionsmith'):
        return logging.getLogger(name)
    return logging.getLogger(f'captionsmith.{name}')
