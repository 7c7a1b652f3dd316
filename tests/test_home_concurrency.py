import pytest

from storefront.app.factory import create_app

from cosmic_fixtures import RendezvousBucket, bucket_config


@pytest.fixture()
def rendezvous():
    return RendezvousBucket()


@pytest.fixture()
def rendezvous_client(rendezvous):
    app = create_app(bucket_config(rendezvous.transport))
    with app.test_client() as client:
        yield client


def test_home_page_fetches_products_and_collections_together(rendezvous_client, rendezvous):
    r = rendezvous_client.get("/")

    assert r.status_code == 200
    assert rendezvous.timed_out == []
    assert sorted(q["type"] for q in rendezvous.queries()) == ["collections", "products"]
    html = r.get_data(as_text=True)
    assert "Nothing here yet." in html
    assert "Linen Shirt" in html


def test_home_feed_fetches_products_and_collections_together(rendezvous_client, rendezvous):
    r = rendezvous_client.get("/api/home")

    assert r.status_code == 200
    assert rendezvous.timed_out == []
    assert r.json["products_region"] == "grid"
    assert r.json["collections_region"] == "grid"
    assert [c["slug"] for c in r.json["collections"]] == ["summer", "empty-shelf"]


def test_sequential_fetches_never_meet():
    bucket = RendezvousBucket(wait_timeout=0.05)
    app = create_app(bucket_config(bucket.transport))

    with app.test_client() as client:
        r = client.get("/api/products")

    assert r.status_code == 200
    assert r.json["items"] == []
    assert r.json["unavailable"] is True
    assert bucket.timed_out == ["products"]
