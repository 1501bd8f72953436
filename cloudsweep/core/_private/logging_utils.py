import logging

_default_handler = None

# Third party loggers kept quiet unless debugging
_NOISY_LOGGERS = ["boto3", "botocore", "urllib3"]


def setup_logger(logging_level, logging_format):
    """Setup default logging of the cloudsweep logger tree."""
    if type(logging_level) is str:
        logging_level = logging.getLevelName(logging_level.upper())
    logger = logging.getLogger("cloudsweep")
    logger.setLevel(logging_level)

    global _default_handler
    if _default_handler is None:
        _default_handler = logging.StreamHandler()
        logger.addHandler(_default_handler)
    _default_handler.setFormatter(logging.Formatter(logging_format))
    logger.propagate = False

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.DEBUG if logging_level == logging.DEBUG else logging.WARNING)
