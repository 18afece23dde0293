API = "/api/v1"

REVIEW = {
    "author": "Rina",
    "rating_aesthetic": 9,
    "rating_work": 7,
    "crowd_morning": 2,
    "crowd_afternoon": 3,
    "crowd_evening": 4,
    "text": "Kopinya enak, colokan banyak, cocok buat nugas sampai malam.",
    "photos": ["https://res.cloudinary.com/demo/image/upload/a.jpg"],
}


def _submit(client, cafe_id="cafe-kopi", **overrides):
    response = client.post(f"{API}/cafes/{cafe_id}/reviews", json=dict(REVIEW, **overrides))
    assert response.status_code == 201
    return response.json()


def test_new_reviews_wait_for_moderation(client, seeded):
    review = _submit(client)
    assert review["status"] == "pending"

    cafe = client.get(f"{API}/cafes/cafe-kopi").json()
    assert cafe["reviews"] == []
    assert cafe["avg_aesthetic_score"] == 0

    pending = client.get(f"{API}/reviews/pending").json()
    assert [(r["id"], r["cafe_name"]) for r in pending] == [(review["id"], "Kopi Kenangan Senja")]


def test_client_cannot_self_approve(client, seeded):
    review = _submit(client, status="approved")
    assert review["status"] == "pending"


def test_approval_updates_aggregates(client, seeded):
    first = _submit(client)
    second = _submit(client, rating_aesthetic=8, rating_work=6, crowd_evening=2)
    for review in (first, second):
        response = client.patch(f"{API}/reviews/{review['id']}/status", json={"status": "approved"})
        assert response.json()["status"] == "approved"

    cafe = client.get(f"{API}/cafes/cafe-kopi").json()
    assert cafe["avg_aesthetic_score"] == 8.5
    assert cafe["avg_work_score"] == 6.5
    assert cafe["avg_crowd_evening"] == 3.0
    assert cafe["approved_review_count"] == 2
    assert client.get(f"{API}/reviews/pending").json() == []

    top = client.get(f"{API}/home").json()["top_reviews"]
    assert [r["id"] for r in top] == [first["id"], second["id"]]


def test_rejected_review_stays_hidden(client, seeded):
    review = _submit(client)
    client.patch(f"{API}/reviews/{review['id']}/status", json={"status": "rejected"})
    cafe = client.get(f"{API}/cafes/cafe-kopi").json()
    assert cafe["reviews"] == []
    assert cafe["approved_review_count"] == 0


def test_rating_bounds(client, seeded):
    response = client.post(f"{API}/cafes/cafe-kopi/reviews", json=dict(REVIEW, rating_work=11))
    assert response.status_code == 422
    response = client.post(f"{API}/cafes/cafe-kopi/reviews", json=dict(REVIEW, crowd_morning=0))
    assert response.status_code == 422


def test_review_for_missing_cafe(client, seeded):
    response = client.post(f"{API}/cafes/ghost/reviews", json=REVIEW)
    assert response.status_code == 404


def test_helpful_votes_feed_leaderboard(client, seeded):
    rina = _submit(client)
    budi = _submit(client, author="Budi")
    for review in (rina, budi):
        client.patch(f"{API}/reviews/{review['id']}/status", json={"status": "approved"})
    for _ in range(3):
        client.post(f"{API}/reviews/{budi['id']}/helpful")
    assert client.post(f"{API}/reviews/{rina['id']}/helpful").json()["helpful_count"] == 1

    board = client.get(f"{API}/leaderboard").json()
    assert [(e["author"], e["total_helpful"]) for e in board] == [("Budi", 3), ("Rina", 1)]


def test_unknown_review(client, seeded):
    assert client.post(f"{API}/reviews/rev-missing/helpful").status_code == 404
