import logging
from typing import Union

from pythonjsonlogger import jsonlogger

FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def setup_logger(level: Union[int, str] = logging.INFO,
                 json_format: bool = True) -> logging.Logger:
    logger = logging.getLogger('captchas')
    if isinstance(level, str):
        level = int(level) if level.isdigit() else level.upper()
    logger.setLevel(level)
    if logger.handlers:
        return logger

    logHandler = logging.StreamHandler()
    if json_format:
        formatter = jsonlogger.JsonFormatter(
            FORMAT,
            rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
        )
    else:
        formatter = logging.Formatter(FORMAT)
    logHandler.setFormatter(formatter)
    logger.addHandler(logHandler)
    return logger
