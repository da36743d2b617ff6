"""Module: logging_config."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # Access logs are noisy next to handler logs.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
