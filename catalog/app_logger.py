import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
BASE_LOGGER = "catalog"


def setup_logging(level: str = "INFO") -> logging.Logger:
    level_value = getattr(logging, str(level).upper(), logging.INFO)

    logger = logging.getLogger(BASE_LOGGER)
    logger.setLevel(level_value)

    # create_app() can run many times in one process (tests)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level_value)

    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = logging.getLogger(BASE_LOGGER)
    if not name:
        return base
    if name.startswith(BASE_LOGGER + "."):
        name = name[len(BASE_LOGGER) + 1:]
    return base.getChild(name)
