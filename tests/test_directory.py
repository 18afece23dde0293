from datetime import date, datetime

from nongkrongr.services import directory
from nongkrongr.services.directory import ExploreFilters

from tests.factories import make_cafe, make_review


def test_averages_count_approved_reviews_only():
    reviews = [
        make_review(aesthetic=8, work=6),
        make_review(aesthetic=9, work=7),
        make_review(status="pending", aesthetic=1, work=1),
    ]
    averages = directory.compute_averages(reviews)
    assert averages["avg_aesthetic_score"] == 8.5
    assert averages["avg_work_score"] == 6.5


def test_averages_default_to_zero():
    averages = directory.compute_averages([make_review(status="rejected")])
    assert set(averages.values()) == {0.0}


def test_averages_round_halves_up():
    reviews = [make_review(aesthetic=score) for score in (1, 2, 3, 3)]
    assert directory.compute_averages(reviews)["avg_aesthetic_score"] == 2.3


def test_public_view_hides_unapproved_reviews():
    cafe = make_cafe(reviews=[make_review(), make_review(status="pending")])
    public = directory.public_view(cafe)
    assert [r.status for r in public.reviews] == ["approved"]
    assert len(cafe.reviews) == 2


def test_filters_combine():
    quiet = make_cafe("Sunyi", vibes=["cozy"], amenities=["wifi", "outlet"], reviews=[make_review(evening=2)])
    busy = make_cafe("Ramai", vibes=["cozy"], amenities=["wifi"], reviews=[make_review(evening=5)])
    pricey = make_cafe("Mahal", vibes=["cozy"], amenities=["wifi", "outlet"], price_tier=4)
    cafes = [quiet, busy, pricey]

    filters = ExploreFilters(vibes=["cozy"], amenities=["wifi", "outlet"], price_tier=3, crowd=3)
    assert directory.filter_cafes(cafes, filters) == [quiet]


def test_search_is_case_insensitive_name_match():
    cafes = [make_cafe("Kopi Senja"), make_cafe("Teh Pagi")]
    assert [c.name for c in directory.filter_cafes(cafes, ExploreFilters(search="senja"))] == ["Kopi Senja"]


def test_district_and_open_now():
    day = make_cafe("Siang", district="Kemuning", opening_hours="08:00 - 17:00")
    night = make_cafe("Malam", district="Kemuning", opening_hours="18:00 - 02:00")
    other = make_cafe("Lain", district="Sako", opening_hours="18:00 - 02:00")
    filters = ExploreFilters(district="Kemuning", open_now=True)
    result = directory.filter_cafes([day, night, other], filters, now=datetime(2025, 3, 5, 21, 0))
    assert [c.name for c in result] == ["Malam"]


def test_nearby_sorted_and_bounded():
    near = make_cafe("Dekat", coords={"lat": -2.9917, "lng": 104.7632})
    far = make_cafe("Jauh", coords={"lat": -3.2, "lng": 104.9})
    result = directory.nearby([far, near], -2.99, 104.76, max_km=5)
    assert [item.cafe.name for item in result] == ["Dekat"]
    assert result[0].travel_label.endswith("mnt")


def test_trending_by_aesthetic():
    cafes = [make_cafe(f"C{i}", reviews=[make_review(aesthetic=i + 1)]) for i in range(6)]
    assert [c.name for c in directory.trending(cafes)] == ["C5", "C4", "C3", "C2"]


def test_recommended_skips_unreviewed_and_favours_sponsors():
    plain = make_cafe("Biasa", reviews=[make_review(aesthetic=9, work=9)])
    sponsor = make_cafe("Sponsor", reviews=[make_review(aesthetic=5, work=5)], is_sponsored=True)
    empty = make_cafe("Kosong", is_sponsored=True)
    assert [c.name for c in directory.recommended([plain, sponsor, empty])] == ["Sponsor", "Biasa"]


def test_recommendation_score_bonuses():
    base = make_cafe(reviews=[make_review(aesthetic=8, work=6)])
    with_spot = make_cafe(reviews=[make_review(aesthetic=8, work=6)], spots=1)
    assert directory.recommendation_score(base) == 7.0
    assert directory.recommendation_score(with_spot) == 8.5


def test_sponsored_respects_expiry_and_rank():
    today = date(2025, 3, 5)
    second = make_cafe("B", is_sponsored=True, sponsored_rank=2)
    first = make_cafe("A", is_sponsored=True, sponsored_rank=1, sponsored_until=date(2025, 3, 5))
    expired = make_cafe("C", is_sponsored=True, sponsored_until=date(2025, 3, 4))
    pending = make_cafe("D", is_sponsored=True, status="pending")
    result = directory.sponsored([second, first, expired, pending], today)
    assert [c.name for c in result] == ["A", "B"]
    assert directory.sponsored([second, first], today, n=1) == [first]


def test_top_reviews_need_text_and_rank_by_rating():
    long_text = "Tempatnya nyaman banget buat nugas"
    cafe = make_cafe(
        "Kopi",
        reviews=[
            make_review(aesthetic=9, work=9, text=long_text),
            make_review(aesthetic=10, work=10, text="pendek"),
            make_review(aesthetic=6, work=6, text=long_text + "!"),
            make_review(aesthetic=10, work=10, text=long_text, status="pending"),
        ],
    )
    top = directory.top_reviews([cafe])
    assert [(r.rating_aesthetic, r.cafe_slug) for r in top] == [(9, "kopi"), (6, "kopi")]


def test_pending_reviews_carry_cafe_name():
    cafe = make_cafe("Kopi", reviews=[make_review(status="pending"), make_review()])
    pending = directory.pending_reviews([cafe])
    assert len(pending) == 1
    assert pending[0].cafe_name == "Kopi"


def test_leaderboard_sums_helpful_votes():
    cafe = make_cafe(
        reviews=[
            make_review(author="Rina", helpful_count=3),
            make_review(author="Budi", helpful_count=5),
            make_review(author="Rina", helpful_count=4),
        ]
    )
    board = directory.leaderboard([cafe])
    assert [(e.author, e.total_helpful, e.review_count) for e in board] == [("Rina", 7, 2), ("Budi", 5, 1)]


def test_near_filter_drops_far_cafes_and_sorts_by_distance():
    close = make_cafe("Ampera", vibes=["cozy"], coords={"lat": -2.9915, "lng": 104.7637})
    mid = make_cafe("Kenangan", vibes=["cozy"], coords={"lat": -2.9761, "lng": 104.7754})
    quiet = make_cafe("Sepi", vibes=["aesthetic"], coords={"lat": -2.9916, "lng": 104.7634})
    far = make_cafe("Jauh", vibes=["cozy"], coords={"lat": -3.2, "lng": 104.9})
    filters = ExploreFilters(vibes=["cozy"], near=(-2.9917, 104.7632, 5))
    result = directory.filter_cafes([mid, far, quiet, close], filters)
    assert [c.name for c in result] == ["Ampera", "Kenangan"]
