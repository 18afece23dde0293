from datetime import date, timedelta

from fastapi.testclient import TestClient

from nongkrongr import main
from nongkrongr.schemas.profile import ProfileCreate
from nongkrongr.services import profiles
from nongkrongr.services.cafes import slugify

API = "/api/v1"


def test_slugify():
    assert slugify("  Kopi Kenangan  Senja! ") == "kopi-kenangan-senja"
    assert slugify("!!!").startswith("cafe-")


def test_list_returns_approved_cafes(client, seeded):
    response = client.get(f"{API}/cafes")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Kopi Kenangan Senja", "Rooftop Musi", "Warung Kopi Ampera"]


def test_create_assigns_unique_slug(client, seeded):
    payload = {"name": "Kopi Kenangan Senja", "price_tier": 3, "vibes": ["cozy"]}
    response = client.post(f"{API}/cafes", json=payload)
    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "kopi-kenangan-senja-2"
    assert body["status"] == "approved"
    assert [v["id"] for v in body["vibes"]] == ["cozy"]


def test_create_rejects_unknown_vibe(client, seeded):
    response = client.post(f"{API}/cafes", json={"name": "Baru", "vibes": ["haunted"]})
    assert response.status_code == 404
    assert "haunted" in response.json()["detail"]


def test_owner_submissions_start_pending(client, seeded):
    owner = profiles.register(seeded, ProfileCreate(id="owner-1", username="owner", email="o@x.id", role="admin_cafe"))
    response = client.post(f"{API}/cafes", json={"name": "Kafe Pemilik", "manager_id": owner.id})
    assert response.json()["status"] == "pending"
    assert "Kafe Pemilik" not in [c["name"] for c in client.get(f"{API}/cafes").json()]

    pending = client.get(f"{API}/cafes", params={"status": "pending"}).json()
    assert [c["name"] for c in pending] == ["Kafe Pemilik"]

    dashboard = client.get(f"{API}/profiles/owner-1/dashboard").json()
    assert dashboard == {"total": 1, "pending": 1, "approved": 0, "rejected": 0}


def test_get_by_slug_and_missing(client, seeded):
    assert client.get(f"{API}/cafes/rooftop-musi").json()["id"] == "cafe-rooftop"
    assert client.get(f"{API}/cafes/nope").status_code == 404


def test_update_replaces_relations(client, seeded):
    response = client.patch(f"{API}/cafes/cafe-kopi", json={"amenities": ["wifi"], "price_tier": 3})
    body = response.json()
    assert [a["id"] for a in body["amenities"]] == ["wifi"]
    assert body["price_tier"] == 3
    assert [v["id"] for v in body["vibes"]] == ["cozy"]


def test_status_change_hides_cafe(client, seeded):
    response = client.patch(f"{API}/cafes/cafe-rooftop/status", json={"status": "archived"})
    assert response.json()["status"] == "archived"
    names = [c["name"] for c in client.get(f"{API}/cafes").json()]
    assert "Rooftop Musi" not in names
    assert client.patch(f"{API}/cafes/cafe-rooftop/status", json={"status": "gone"}).status_code == 422


def test_delete(client, seeded):
    assert client.delete(f"{API}/cafes/cafe-warung").status_code == 204
    assert client.get(f"{API}/cafes/cafe-warung").status_code == 404


def test_spots_and_events(client, seeded):
    spot = client.post(f"{API}/cafes/cafe-kopi/spots", json={"title": "Meja jendela", "tip": "Sore hari"}).json()
    assert [s["title"] for s in client.get(f"{API}/cafes/cafe-kopi").json()["spots"]] == ["Meja jendela"]

    today = date.today()
    event = {
        "name": "Live Akustik",
        "start_date": (today - timedelta(days=1)).isoformat(),
        "end_date": (today + timedelta(days=1)).isoformat(),
    }
    created = client.post(f"{API}/cafes/cafe-kopi/events", json=event)
    assert created.status_code == 201
    assert [e["name"] for e in client.get(f"{API}/cafes/events/active").json()] == ["Live Akustik"]

    backwards = dict(event, start_date=event["end_date"], end_date=event["start_date"])
    assert client.post(f"{API}/cafes/cafe-kopi/events", json=backwards).status_code == 422

    assert client.delete(f"{API}/cafes/cafe-kopi/spots/{spot['id']}").status_code == 204
    assert client.delete(f"{API}/cafes/cafe-rooftop/events/{created.json()['id']}").status_code == 404


def test_opening_status(client, seeded):
    body = client.get(f"{API}/cafes/cafe-warung/opening-status").json()
    assert body["is_open"] is True
    assert body["open_late"] is True


def test_explore_filters_and_paging(client, seeded):
    body = client.get(f"{API}/explore", params={"district": "Ilir Barat I"}).json()
    assert body["total"] == 2
    body = client.get(f"{API}/explore", params={"vibe": "cozy", "amenity": ["wifi", "outlet"]}).json()
    assert [c["id"] for c in body["items"]] == ["cafe-kopi"]
    body = client.get(f"{API}/explore", params={"limit": 1, "offset": 1}).json()
    assert body["total"] == 3
    assert [c["id"] for c in body["items"]] == ["cafe-rooftop"]


def test_nearby(client, seeded):
    body = client.get(f"{API}/explore/nearby", params={"lat": -2.9917, "lng": 104.7632, "max_km": 1}).json()
    assert [item["cafe"]["id"] for item in body] == ["cafe-warung", "cafe-rooftop"]


def test_home_feed(client, seeded):
    client.patch(f"{API}/cafes/cafe-rooftop", json={"is_sponsored": True})
    body = client.get(f"{API}/home").json()
    assert [c["id"] for c in body["sponsored"]] == ["cafe-rooftop"]
    assert len(body["trending"]) == 3
    assert body["recommended"] == []
    assert body["top_reviews"] == []


def test_vocabulary_endpoints(client, seeded):
    assert [v["id"] for v in client.get(f"{API}/vibes").json()] == ["aesthetic", "cozy"]
    assert client.post(f"{API}/tags", json={"id": "halal", "name": "Halal"}).status_code == 201
    assert client.post(f"{API}/tags", json={"id": "halal", "name": "Halal"}).status_code == 409

    assert client.delete(f"{API}/amenities/outlet").status_code == 204
    amenities = client.get(f"{API}/cafes/cafe-kopi").json()["amenities"]
    assert [a["id"] for a in amenities] == ["wifi"]


def test_nearby_applies_explore_filters(client, seeded):
    params = {"lat": -2.9917, "lng": 104.7632, "max_km": 5, "district": "Ilir Barat I"}
    body = client.get(f"{API}/explore/nearby", params=params).json()
    assert [item["cafe"]["id"] for item in body] == ["cafe-warung", "cafe-kopi"]
    body = client.get(f"{API}/explore/nearby", params={**params, "amenity": "outlet"}).json()
    assert [item["cafe"]["id"] for item in body] == ["cafe-kopi"]


def test_explore_sorts_by_distance_when_located(client, seeded):
    params = {"lat": -2.9761, "lng": 104.7754}
    body = client.get(f"{API}/explore", params=params).json()
    assert [c["id"] for c in body["items"]] == ["cafe-kopi", "cafe-warung", "cafe-rooftop"]
    body = client.get(f"{API}/explore", params={**params, "max_km": 1}).json()
    assert body["total"] == 1


def test_startup_ensures_tables(monkeypatch):
    calls = []
    monkeypatch.setattr(main, "init_db", lambda: calls.append("init"))
    with TestClient(main.app) as client:
        assert client.get("/health").json()["status"] == "healthy"
    assert calls == ["init"]
