import logging

from storefront.app.common.log import LOGGER_NAME, configure_logging
from storefront.app.config import TestConfig
from storefront.app.factory import create_app


def _named_handlers(logger):
    return [h for h in logger.handlers if h.get_name() == LOGGER_NAME]


def test_handler_is_attached_once_across_apps():
    create_app(TestConfig)
    app = create_app(TestConfig)
    logger = configure_logging(app)

    assert logger.name == LOGGER_NAME
    assert len(_named_handlers(logger)) == 1


def test_records_do_not_reach_the_root_logger():
    logger = configure_logging(create_app(TestConfig))
    assert logger.propagate is False

    seen = []

    class Collect(logging.Handler):
        def emit(self, record):
            seen.append(record)

    root = logging.getLogger()
    collector = Collect()
    root.addHandler(collector)
    try:
        logging.getLogger("storefront.modules.catalog.fetchers").warning("once only")
    finally:
        root.removeHandler(collector)

    assert seen == []


def test_level_follows_config():
    config = type("QuietConfig", (TestConfig,), {"LOG_LEVEL": "WARNING"})
    logger = configure_logging(create_app(config))
    assert logger.level == logging.WARNING
