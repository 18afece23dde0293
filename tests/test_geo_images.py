import pytest

from nongkrongr.core.utils import round_half_up
from nongkrongr.services.geo import distance_km, estimate_minutes, format_duration, road_distance_km
from nongkrongr.services.images import optimized_image_url

AMPERA = (-2.9917, 104.7632)
PIM = (-2.9781, 104.7420)


def test_distance_is_zero_for_same_point():
    assert distance_km(*AMPERA, *AMPERA) == 0


def test_distance_within_palembang():
    km = distance_km(*AMPERA, *PIM)
    assert 2.5 < km < 3.0
    assert distance_km(*PIM, *AMPERA) == pytest.approx(km)


def test_road_distance_adds_detour_factor():
    assert road_distance_km(*AMPERA, *PIM) == round_half_up(distance_km(*AMPERA, *PIM) * 1.4, 1)


def test_round_half_up():
    assert round_half_up(2.25, 1) == 2.3
    assert round_half_up(12.5) == 13
    assert round_half_up(0.125, 2) == 0.13


def test_estimate_minutes_at_city_speed():
    assert estimate_minutes(15) == 30
    assert estimate_minutes(0) == 0


@pytest.mark.parametrize(
    "minutes, label",
    [(5, "5 mnt"), (59, "59 mnt"), (60, "1 jam"), (125, "2 jam 5 mnt")],
)
def test_format_duration(minutes, label):
    assert format_duration(minutes) == label


def test_cloudinary_url_gets_transform():
    url = "https://res.cloudinary.com/demo/image/upload/v1/cafes/a.jpg"
    assert optimized_image_url(url, 400) == "https://res.cloudinary.com/demo/image/upload/f_auto,q_auto,w_400/v1/cafes/a.jpg"


def test_transformed_url_is_left_alone():
    url = "https://res.cloudinary.com/demo/image/upload/f_auto,q_auto,w_500/v1/a.jpg"
    assert optimized_image_url(url) == url


def test_other_urls_pass_through():
    assert optimized_image_url("https://example.com/a.jpg") == "https://example.com/a.jpg"
    assert optimized_image_url(None) == ""
