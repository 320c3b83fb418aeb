import pytest

from mealime_pipeline.domain.entities.cookie import Cookie
from mealime_pipeline.domain.entities.cookie_jar import CookieJar
from mealime_pipeline.domain.errors import StorageCorrupt

NOW = 1_700_000_000


def test_merge_replaces_value_by_identity_key():
    jar = CookieJar([Cookie("mealime.com", "/", "auth_token", "old")])
    jar.merge([Cookie(".mealime.com", "/", "auth_token", "new")])
    assert len(jar) == 1
    assert jar.get("mealime.com", "/", "auth_token").value == "new"


def test_merge_is_idempotent():
    cookie = Cookie("mealime.com", "/", "auth_token", "v")
    jar = CookieJar()
    assert jar.merge([cookie]) == 1
    assert jar.merge([cookie]) == 0
    assert list(jar) == [cookie]


def test_get_missing_cookie_returns_none():
    assert CookieJar().get("mealime.com", "/", "auth_token") is None


def test_matching_honours_domain_path_secure_and_expiry():
    jar = CookieJar(
        [
            Cookie("mealime.com", "/", "auth_token", "a", secure=True),
            Cookie("app.mealime.com", "/", "_session", "s", host_only=True),
            Cookie("api.mealime.com", "/", "other_host", "x", host_only=True),
            Cookie("mealime.com", "/api", "api_only", "p"),
            Cookie("mealime.com", "/", "stale", "e", expires=NOW - 1),
            Cookie("example.com", "/", "foreign", "f"),
        ]
    )
    names = [c.name for c in jar.matching("https://app.mealime.com/api/meal_plan", now=NOW)]
    assert names[0] == "api_only"  # longest path first
    assert set(names) == {"auth_token", "_session", "api_only"}

    plain = [c.name for c in jar.matching("http://app.mealime.com/login", now=NOW)]
    assert set(plain) == {"_session"}


def test_path_prefix_must_end_on_a_segment():
    cookie = Cookie("mealime.com", "/api", "n", "v")
    assert cookie.matches("https://mealime.com/api/x", NOW)
    assert not cookie.matches("https://mealime.com/apix", NOW)


def test_serialization_round_trip_preserves_every_attribute():
    cookies = [
        Cookie("mealime.com", "/", "auth_token", "abc==", expires=NOW + 3600, secure=True, http_only=True, same_site="Lax"),
        Cookie("app.mealime.com", "/", "_mealime_session", "s%2Fv", host_only=True),
        Cookie("mealime.com", "/api", "XSRF-TOKEN", "", expires=None, same_site="Strict"),
    ]
    restored = CookieJar.loads(CookieJar(cookies).dumps())
    assert sorted(restored, key=lambda c: c.key) == sorted(cookies, key=lambda c: c.key)


@pytest.mark.parametrize(
    "payload",
    ["not json", "{}", '{"cookies": [{"name": "x"}]}', "[]", '{"cookies": [1]}', '{"cookies": ["x"]}'],
)
def test_unparseable_payload_raises_storage_corrupt(payload):
    with pytest.raises(StorageCorrupt):
        CookieJar.loads(payload)
