import pytest

from f1tv_dl.exceptions import InvalidUrlError
from f1tv_dl.models.content import ContentRef
from f1tv_dl.utils.url import extract_content_ref, is_service_url

RACE_URL = "https://f1tv.formula1.com/detail/1000005104/2022-bahrain-grand-prix-race"


@pytest.mark.parametrize(
    "url",
    [
        RACE_URL,
        "https://F1TV.formula1.com/DETAIL/1000005104/race",
        "https://f1tv.formula1.com/en/replays/detail/1000005104/race?action=play",
    ],
)
def test_is_service_url_accepts_detail_pages(url):
    assert is_service_url(url)


@pytest.mark.parametrize(
    "value",
    [
        "https://www.formula1.com/detail/1000005104/race",
        "https://f1tv.formula1.com/page/395/live",
        "f1tv.formula1.com/detail/1000005104/race",
        "not a url",
        "",
        "http://[::1",
        None,
        b"https://f1tv.formula1.com/detail/1000005104/race",
    ],
)
def test_is_service_url_rejects_without_raising(value):
    assert is_service_url(value) is False


def test_extract_content_ref():
    ref = extract_content_ref(RACE_URL)
    assert ref == ContentRef(id="1000005104", name="2022-bahrain-grand-prix-race")


def test_extract_content_ref_ignores_trailing_slash_and_query():
    ref = extract_content_ref(RACE_URL + "/?action=play")
    assert ref.id == "1000005104"
    assert ref.name == "2022-bahrain-grand-prix-race"


def test_extract_content_ref_is_stable_when_rebuilt():
    ref = extract_content_ref(RACE_URL)
    rebuilt = f"https://f1tv.formula1.com/detail/{ref.id}/{ref.name}"
    assert extract_content_ref(rebuilt) == ref


def test_extract_content_ref_rejects_foreign_urls():
    with pytest.raises(InvalidUrlError):
        extract_content_ref("https://example.com/detail/1/x")


def test_extract_content_ref_requires_two_segments():
    with pytest.raises(InvalidUrlError):
        extract_content_ref("https://f1tv.formula1.com/detail")
