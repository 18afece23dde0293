"""Logging setup shared by the API and the scripts."""

import logging

from nongkrongr.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)
