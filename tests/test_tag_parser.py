"""Tests for module version tag parsing."""

import pytest

from versioning.models import Tag
from versioning.parser import parse_tag


def test_well_formed_tag():
    mv = parse_tag("s3-bucket/v1.2.3", "s3-bucket")
    assert mv is not None
    assert mv.core == (1, 2, 3)
    assert mv.module_id == "s3-bucket"
    assert mv.tag.name == "s3-bucket/v1.2.3"
    assert mv.version_string == "1.2.3"


def test_accepts_tag_object_and_keeps_commit():
    mv = parse_tag(Tag(name="vpc/v0.4.0", commit="abc123"), "vpc")
    assert mv.core == (0, 4, 0)
    assert mv.tag.commit == "abc123"


@pytest.mark.parametrize("text", [
    "v1.0.0",
    "S3-Bucket/v1.0.0",
    "s3-bucket/V1.0.0",
    "s3-bucket/1.0.0",
    "s3-bucket/v1.0",
    "s3-bucket/v1.0.0.0",
    "s3-bucket/v1.0.0 ",
    " s3-bucket/v1.0.0",
    "s3-bucket/v01.0.0",
    "s3-bucket/v1.0.x",
    "s3-bucket/v-1.0.0",
    "s3-bucket-extra/v1.0.0",
    "prefix/s3-bucket/v1.0.0",
    "s3-bucket/v1.0.0-",
    "",
])
def test_non_matching_tags_return_none(text):
    assert parse_tag(text, "s3-bucket") is None


def test_other_module_is_ignored():
    assert parse_tag("vpc/v1.0.0", "s3-bucket") is None


def test_empty_module_id_never_matches():
    assert parse_tag("/v1.0.0", "") is None


def test_module_id_is_matched_literally():
    assert parse_tag("s3xbucket/v1.0.0", "s3.bucket") is None
    assert parse_tag("s3.bucket/v1.0.0", "s3.bucket") is not None


def test_nested_module_id():
    mv = parse_tag("modules/network/vpc/v2.1.0", "modules/network/vpc")
    assert mv.core == (2, 1, 0)


def test_prerelease_suffix():
    mv = parse_tag("s3-bucket/v1.2.0-rc.1", "s3-bucket")
    assert mv.core == (1, 2, 0)
    assert tuple(mv.version.prerelease) == ("rc", "1")
    assert mv.version_string == "1.2.0-rc.1"


def test_build_metadata_kept_out_of_precedence():
    mv = parse_tag("s3-bucket/v1.2.0+build.7", "s3-bucket")
    assert mv.build == ("build", "7")
    assert mv.precedence == (1, 2, 0, ())
    assert mv.version_string == "1.2.0+build.7"


def test_prerelease_orders_below_release():
    pre = parse_tag("s3-bucket/v1.0.0-beta", "s3-bucket")
    rel = parse_tag("s3-bucket/v1.0.0", "s3-bucket")
    assert pre.version < rel.version


def test_numeric_not_lexicographic_ordering():
    a = parse_tag("m/v1.9.0", "m").version
    b = parse_tag("m/v1.10.0", "m").version
    c = parse_tag("m/v2.0.0", "m").version
    assert a < b < c
