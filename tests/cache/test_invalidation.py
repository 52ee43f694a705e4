"""Tests for the entity relation table."""

import pytest

from cache.invalidation import RELATED_ENTITIES, prefixes_for
from cache.store import CacheStore


class TestPrefixes:
    def test_session_includes_required_relations(self):
        prefixes = prefixes_for("session", 42)
        for kind in ("session", "user", "therapist", "payment"):
            assert f"{kind}:" in prefixes
            assert f"{kind}_42:" in prefixes

    def test_journal_relations(self):
        assert set(RELATED_ENTITIES["journal"]) >= {"user", "recommendations"}

    def test_no_duplicates(self):
        prefixes = prefixes_for("user", 1)
        assert len(prefixes) == len(set(prefixes))

    def test_unknown_kind(self):
        assert prefixes_for("widget", 3) == ["widget:", "widget_3:"]


@pytest.mark.parametrize("kind", sorted(RELATED_ENTITIES))
def test_mutation_purges_every_listed_prefix(kind):
    cache = CacheStore()
    expected_gone = []
    for related in (kind, *RELATED_ENTITIES[kind]):
        for key in (f"{related}:5:data", f"{related}_5:data"):
            cache.set(key, 1)
            expected_gone.append(key)
    cache.set("zzz_unrelated:5", 1)

    cache.notify_mutation(kind, 5)

    for key in expected_gone:
        assert cache.get(key) is None
    assert cache.get("zzz_unrelated:5") == 1
