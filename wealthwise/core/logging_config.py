import logging

from wealthwise.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    else:
        logging.getLogger().setLevel(settings.LOG_LEVEL.upper())
