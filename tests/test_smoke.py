from storefront.app import config
from storefront.app.factory import create_app


def test_health():
    app = create_app(config.TestConfig)
    with app.test_client() as c:
        r = c.get("/health")
        assert r.status_code == 200
        assert r.json["status"] == "ok"


def test_api_index():
    app = create_app(config.TestConfig)
    with app.test_client() as c:
        r = c.get("/api")
        assert r.status_code == 200
        assert "/products/<slug>" in r.json["endpoints"]["catalog"]


def test_request_id_is_echoed():
    app = create_app(config.TestConfig)
    with app.test_client() as c:
        r = c.get("/health", headers={"X-Request-ID": "abc-123"})
        assert r.headers["X-Request-ID"] == "abc-123"


def test_unknown_api_route_returns_json_error():
    app = create_app(config.TestConfig)
    with app.test_client() as c:
        r = c.get("/api/nope")
        assert r.status_code == 404
        assert r.json["error"]["code"] == "http_error"
