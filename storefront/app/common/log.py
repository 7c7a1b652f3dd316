from __future__ import annotations

import logging

from flask import Flask

from storefront.app.common.request_context import RequestIdFilter

LOGGER_NAME = "storefront"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


def configure_logging(app: Flask) -> logging.Logger:
    """Route every ``storefront.*`` logger through one stream handler.

    Safe to call once per app instance; the handler is only attached once.
    Records stop at this logger so a configured root logger does not print
    them a second time.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    logger.propagate = False

    if not any(h.get_name() == LOGGER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(LOGGER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(RequestIdFilter())
        logger.addHandler(handler)

    return logger
