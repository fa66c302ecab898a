"""Tests for kind / scheme / match-mode filtering."""

import pytest

from yarnmappings.cache import MappingCache
from yarnmappings.errors import NoSuchVersionError
from yarnmappings.models import EntryKind, MappingEntry, MatchMode, NamingScheme
from yarnmappings.query import QueryEngine

BLOCK = MappingEntry(EntryKind.CLASS, obfuscated="a", intermediary="net/minecraft/class_1",
                     named="net/minecraft/block/Block")
STATE = MappingEntry(EntryKind.CLASS, obfuscated="b", intermediary="net/minecraft/class_2",
                     named="net/minecraft/block/BlockState")
UNNAMED = MappingEntry(EntryKind.CLASS, obfuscated="e", intermediary="net/minecraft/class_3")
TICK = MappingEntry(EntryKind.METHOD, obfuscated="tick", intermediary="method_1", named="tick",
                    owner="a", descriptor="()V")
FIELD = MappingEntry(EntryKind.FIELD, obfuscated="d", intermediary="field_1", named="blockState",
                     owner="a", descriptor="I")


@pytest.fixture
def engine():
    cache = MappingCache()
    cache.put("1.20.1", [BLOCK, STATE, UNNAMED, TICK, FIELD])
    return QueryEngine(cache)


class TestQueryEngine:
    """Test QueryEngine.query semantics."""

    def test_unknown_version(self, engine):
        with pytest.raises(NoSuchVersionError) as excinfo:
            engine.query(None, EntryKind.CLASS, "1.8.9", "Block", MatchMode.SUFFIX)
        assert excinfo.value.version == "1.8.9"

    def test_suffix_with_scheme(self, engine):
        hits = engine.query(NamingScheme.NAMED, EntryKind.CLASS, "1.20.1", "Block", MatchMode.SUFFIX)
        assert hits == [BLOCK]

    def test_suffix_is_case_sensitive(self, engine):
        assert engine.query(NamingScheme.NAMED, EntryKind.CLASS, "1.20.1", "block", MatchMode.SUFFIX) == []

    def test_exact_is_case_insensitive(self, engine):
        hits = engine.query(NamingScheme.INTERMEDIARY, EntryKind.CLASS, "1.20.1",
                            "NET/MINECRAFT/CLASS_2", MatchMode.EXACT)
        assert hits == [STATE]

    def test_exact_requires_full_name(self, engine):
        assert engine.query(NamingScheme.NAMED, EntryKind.CLASS, "1.20.1", "BlockState", MatchMode.EXACT) == []

    def test_filters_by_kind(self, engine):
        hits = engine.query(NamingScheme.NAMED, EntryKind.FIELD, "1.20.1", "blockState", MatchMode.EXACT)
        assert hits == [FIELD]
        assert engine.query(NamingScheme.NAMED, EntryKind.METHOD, "1.20.1", "blockState", MatchMode.EXACT) == []

    def test_absent_name_never_matches(self, engine):
        assert engine.query(NamingScheme.NAMED, EntryKind.CLASS, "1.20.1", "", MatchMode.SUFFIX) == [BLOCK, STATE]

    def test_all_schemes_preserves_order(self, engine):
        hits = engine.query(None, EntryKind.CLASS, "1.20.1", "_3", MatchMode.SUFFIX)
        assert hits == [UNNAMED]
        hits = engine.query(None, EntryKind.CLASS, "1.20.1", "State", MatchMode.SUFFIX)
        assert hits == [STATE]

    def test_all_schemes_one_hit_per_matching_scheme(self, engine):
        hits = engine.query(None, EntryKind.METHOD, "1.20.1", "TICK", MatchMode.EXACT)
        assert hits == [TICK, TICK]

    def test_three_scheme_duplicates(self):
        cache = MappingCache()
        entry = MappingEntry(EntryKind.CLASS, obfuscated="abc", intermediary="x/abc", named="y/abc")
        other = MappingEntry(EntryKind.CLASS, obfuscated="zzz", named="y/abc")
        cache.put("v", [entry, other])
        hits = QueryEngine(cache).query(None, EntryKind.CLASS, "v", "abc", MatchMode.SUFFIX)
        assert hits == [entry, entry, entry, other]
