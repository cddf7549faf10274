"""Tests for listing module versions and resolving constraints."""

import random

import pytest

from versioning.models import Tag
from versioning.parser import InvalidConstraintError, parse_constraint
from versioning.resolver import filter_versions, list_versions, resolve


def versions_of(*numbers, module="s3-bucket"):
    return list_versions([f"{module}/v{n}" for n in numbers], module)


def names(versions):
    return [mv.version_string for mv in versions]


class TestListVersions:

    def test_sorted_ascending_numerically(self):
        tags = ["m/v2.0.0", "m/v1.10.0", "m/v1.9.0", "m/v1.2.3"]
        assert names(list_versions(tags, "m")) == ["1.2.3", "1.9.0", "1.10.0", "2.0.0"]

    def test_filters_foreign_and_malformed_tags(self):
        tags = [
            "s3-bucket/v1.0.0",
            "vpc/v3.0.0",
            "v9.9.9",
            "release-2024",
            "s3-bucket/v1.1",
            "s3-bucket/v1.1.0",
        ]
        assert names(list_versions(tags, "s3-bucket")) == ["1.0.0", "1.1.0"]

    def test_empty_input(self):
        assert list_versions([], "s3-bucket") == []

    def test_stable_under_reordering(self):
        tags = [Tag(f"m/v{a}.{b}.{c}", commit=f"c{a}{b}{c}") for a in range(3) for b in range(3) for c in range(3)]
        tags.append(Tag("m/v1.1.1", commit="zzz"))
        expected = list_versions(tags, "m")
        rng = random.Random(7)
        for _ in range(5):
            shuffled = tags[:]
            rng.shuffle(shuffled)
            assert list_versions(shuffled, "m") == expected

    def test_duplicate_keeps_last_commit_id(self):
        tags = [Tag("m/v1.0.0", commit="aaa"), Tag("m/v1.0.0", commit="fff"), Tag("m/v1.0.0", commit="bbb")]
        result = list_versions(tags, "m")
        assert len(result) == 1
        assert result[0].tag.commit == "fff"

    def test_build_metadata_duplicates_collapse(self):
        tags = [Tag("m/v1.0.0+a", commit="111"), Tag("m/v1.0.0+b", commit="111")]
        result = list_versions(tags, "m")
        assert len(result) == 1
        assert result[0].tag.name == "m/v1.0.0+b"

    def test_prerelease_listed_before_release(self):
        assert names(versions_of("1.0.0", "1.0.0-rc.1", "0.9.0", module="m")) == ["0.9.0", "1.0.0-rc.1", "1.0.0"]


class TestResolve:

    def test_exact_hit(self):
        assert resolve(versions_of("1.0.0", "1.1.0"), "1.1.0").version_string == "1.1.0"

    def test_exact_miss(self):
        assert resolve(versions_of("1.0.0", "1.1.0"), "1.2.0") is None

    def test_pessimistic_patch_drift(self):
        vs = versions_of("1.0.0", "1.1.0", "1.1.5", "1.2.0")
        assert resolve(vs, "~> 1.1.0").version_string == "1.1.5"

    def test_pessimistic_respects_lower_bound(self):
        vs = versions_of("1.1.0", "1.1.2")
        assert resolve(vs, "~> 1.1.3") is None

    def test_pessimistic_minor_drift(self):
        vs = versions_of("1.0.0", "1.1.0", "1.4.2", "2.0.0")
        assert resolve(vs, "~> 1.1").version_string == "1.4.2"

    def test_range(self):
        vs = versions_of("1.0.0", "1.1.0", "2.0.0")
        assert resolve(vs, ">= 1.1.0, < 2.0.0").version_string == "1.1.0"

    def test_range_inclusive_upper(self):
        vs = versions_of("1.0.0", "1.1.0", "2.0.0")
        assert resolve(vs, "> 1.0.0, <= 2.0.0").version_string == "2.0.0"

    def test_range_without_match(self):
        assert resolve(versions_of("1.0.0", "3.0.0"), ">= 2.0.0, < 3.0.0") is None

    def test_not_equal_excludes(self):
        vs = versions_of("1.0.0", "1.1.0", "1.2.0")
        assert resolve(vs, ">= 1.0.0, != 1.2.0").version_string == "1.1.0"

    def test_latest(self):
        vs = versions_of("1.0.0", "1.10.0", "1.9.0")
        assert resolve(vs, None).version_string == "1.10.0"
        assert resolve(vs, "").version_string == "1.10.0"

    def test_latest_skips_prerelease(self):
        vs = versions_of("1.0.0", "2.0.0-rc.1")
        assert resolve(vs, None).version_string == "1.0.0"

    def test_range_skips_prerelease(self):
        vs = versions_of("1.0.0", "1.1.0-beta")
        assert resolve(vs, ">= 1.0.0").version_string == "1.0.0"

    def test_prerelease_reachable_when_named(self):
        vs = versions_of("1.0.0", "1.1.0-beta", "1.1.0-rc.1")
        assert resolve(vs, "1.1.0-beta").version_string == "1.1.0-beta"
        assert resolve(vs, ">= 1.1.0-beta").version_string == "1.1.0-rc.1"

    def test_empty_versions(self):
        assert resolve([], "~> 1.0") is None

    def test_accepts_parsed_constraint(self):
        constraint = parse_constraint("~> 1.1.0")
        assert resolve(versions_of("1.1.0", "1.1.9"), constraint).version_string == "1.1.9"

    def test_invalid_constraint_string_raises(self):
        with pytest.raises(InvalidConstraintError):
            resolve(versions_of("1.0.0"), ">= 1.0.0,")

    def test_idempotent_and_pure(self):
        vs = versions_of("1.0.0", "1.1.0", "1.1.5", "1.2.0")
        snapshot = list(vs)
        first = resolve(vs, "~> 1.1.0")
        second = resolve(vs, "~> 1.1.0")
        assert first == second
        assert vs == snapshot

    def test_input_order_does_not_matter(self):
        vs = versions_of("1.2.0", "1.1.5", "1.0.0", "1.1.0")
        assert resolve(list(reversed(vs)), "~> 1.1.0").version_string == "1.1.5"


def test_filter_versions_preserves_order():
    vs = versions_of("1.0.0", "1.1.0", "1.2.0", "2.0.0")
    assert names(filter_versions(vs, parse_constraint(">= 1.1.0, < 2.0.0"))) == ["1.1.0", "1.2.0"]
