import os

from dotenv import load_dotenv

load_dotenv()


def _optional_float(raw: str | None) -> float | None:
    # Unset means the CMS call waits as long as it takes.
    if raw is None or not raw.strip():
        return None
    return float(raw)


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JSON_SORT_KEYS = False

    # Comma-separated list
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "8080"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Cosmic content API
    COSMIC_API_URL = os.getenv("COSMIC_API_URL", "https://api.cosmicjs.com/v3")
    COSMIC_BUCKET_SLUG = os.getenv("COSMIC_BUCKET_SLUG", "")
    COSMIC_READ_KEY = os.getenv("COSMIC_READ_KEY", "")
    COSMIC_TIMEOUT = _optional_float(os.getenv("COSMIC_TIMEOUT"))
    # httpx transport override; None uses the network
    COSMIC_TRANSPORT = None

    # Fixed fetch limits (no pagination)
    FEATURED_PRODUCT_LIMIT = int(os.getenv("FEATURED_PRODUCT_LIMIT", "8"))
    PRODUCT_LIST_LIMIT = int(os.getenv("PRODUCT_LIST_LIMIT", "100"))


class TestConfig(Config):
    TESTING = True
    COSMIC_API_URL = "https://cms.test/v3"
    COSMIC_BUCKET_SLUG = "test-bucket"
    COSMIC_READ_KEY = "test-read-key"
    COSMIC_TIMEOUT = None
    FEATURED_PRODUCT_LIMIT = 4
    PRODUCT_LIST_LIMIT = 50
