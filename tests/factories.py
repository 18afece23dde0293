from datetime import datetime
from itertools import count

from nongkrongr.schemas.cafe import CafeOut, Coords, SpotOut
from nongkrongr.schemas.review import ReviewOut
from nongkrongr.schemas.vocabulary import VocabularyItem
from nongkrongr.services.directory import compute_averages

_ids = count(1)


def make_review(cafe_id="cafe-1", status="approved", aesthetic=8, work=7, evening=3, **overrides):
    data = dict(
        id=f"rev-{next(_ids)}",
        cafe_id=cafe_id,
        author="Rina",
        rating_aesthetic=aesthetic,
        rating_work=work,
        crowd_morning=2,
        crowd_afternoon=3,
        crowd_evening=evening,
        text="",
        status=status,
        helpful_count=0,
        created_at=datetime(2025, 1, 1, 10, 0),
    )
    data.update(overrides)
    return ReviewOut(**data)


def make_cafe(name="Kopi", vibes=(), amenities=(), reviews=(), spots=0, **overrides):
    cafe_id = overrides.pop("id", f"cafe-{next(_ids)}")
    reviews = list(reviews)
    data = dict(
        id=cafe_id,
        slug=name.lower().replace(" ", "-"),
        name=name,
        district="Ilir Barat I",
        opening_hours="08:00 - 22:00",
        price_tier=2,
        coords=Coords(lat=-2.99, lng=104.76),
        status="approved",
        created_at=datetime(2025, 1, 1),
        vibes=[VocabularyItem(id=v, name=v.title()) for v in vibes],
        amenities=[VocabularyItem(id=a, name=a.title()) for a in amenities],
        spots=[SpotOut(id=f"spot-{i}", cafe_id=cafe_id, title="Window seat") for i in range(spots)],
        reviews=reviews,
        approved_review_count=sum(1 for r in reviews if r.status == "approved"),
        **compute_averages(reviews),
    )
    data.update(overrides)
    return CafeOut(**data)
