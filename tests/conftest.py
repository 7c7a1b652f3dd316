import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storefront.app.common.log import LOGGER_NAME
from storefront.app.config import TestConfig
from storefront.app.cosmic import CosmicClient, CosmicSettings
from storefront.app.factory import create_app

from cosmic_fixtures import FakeCosmicBucket, bucket_config


@pytest.fixture()
def bucket():
    return FakeCosmicBucket()


@pytest.fixture()
def cms(bucket):
    """A standalone client wired to the fake bucket (no Flask app needed)."""
    settings = CosmicSettings(
        api_url=TestConfig.COSMIC_API_URL,
        bucket_slug=TestConfig.COSMIC_BUCKET_SLUG,
        read_key=TestConfig.COSMIC_READ_KEY,
        transport=bucket.transport,
    )
    return CosmicClient(settings=settings)


@pytest.fixture()
def app(bucket):
    return create_app(bucket_config(bucket.transport))


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def storefront_caplog(caplog):
    """caplog for the ``storefront`` logger, which does not propagate to root."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)
