"""Parsing for module version tags, version constraints and module sources."""

import re
from typing import Optional, Tuple, Union

import semantic_version

from constants import Constants
from .models import ConstraintClause, ModuleSource, ModuleVersionTag, Tag, VersionConstraint


class InvalidConstraintError(ValueError):
    """Raised when a constraint string cannot be parsed."""

    def __init__(self, constraint: str, reason: str):
        self.constraint = constraint
        self.reason = reason
        super().__init__(f"Invalid version constraint '{constraint}': {reason}")


class InvalidModuleSourceError(ValueError):
    """Raised when a module source address is malformed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid module source '{source}': {reason}")


_NUM = r"(?:0|[1-9][0-9]*)"
_PRE_IDENT = r"(?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*)"
_PRERELEASE = rf"{_PRE_IDENT}(?:\.{_PRE_IDENT})*"
_BUILD = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

# Suffix of a module tag after "<module-id>/v"
_TAG_VERSION_RE = re.compile(
    rf"({_NUM})\.({_NUM})\.({_NUM})(?:-({_PRERELEASE}))?(?:\+({_BUILD}))?"
)

_CLAUSE_RE = re.compile(
    rf"^\s*(~>|>=|<=|!=|=|>|<)?\s*({_NUM})(?:\.({_NUM})(?:\.({_NUM})(?:-({_PRERELEASE}))?)?)?\s*$"
)

_SOURCE_SEGMENT_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def parse_tag(tag: Union[str, Tag], expected_module_id: str) -> Optional[ModuleVersionTag]:
    """Parse ``<module-id>/v<major>.<minor>.<patch>`` for the given module.

    Matching is literal and case-sensitive. Anything else, including tags of
    other modules, yields None rather than an error.
    """
    if isinstance(tag, str):
        tag = Tag(name=tag)
    if not expected_module_id or not isinstance(tag.name, str):
        return None

    prefix = f"{expected_module_id}/v"
    if not tag.name.startswith(prefix):
        return None

    m = _TAG_VERSION_RE.fullmatch(tag.name[len(prefix):])
    if not m:
        return None

    major, minor, patch, prerelease, build = m.groups()
    version = semantic_version.Version(
        major=int(major),
        minor=int(minor),
        patch=int(patch),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
    )
    return ModuleVersionTag(
        module_id=expected_module_id,
        version=version,
        tag=tag,
        build=tuple(build.split(".")) if build else (),
    )


def _parse_clause(raw: str, text: str) -> ConstraintClause:
    m = _CLAUSE_RE.match(text)
    if not m:
        raise InvalidConstraintError(raw, f"cannot parse clause '{text.strip()}'")
    op, major, minor, patch, prerelease = m.groups()
    segments = 1 + (minor is not None) + (patch is not None)
    version = semantic_version.Version(
        major=int(major),
        minor=int(minor or 0),
        patch=int(patch or 0),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
    )
    return ConstraintClause(operator=op or "=", version=version, segments=segments)


def parse_constraint(text: Optional[str]) -> VersionConstraint:
    """Parse a comma-separated constraint such as ``">= 1.1.0, < 2.0.0"``.

    Empty input and the ``latest`` keyword produce a constraint with no
    clauses. Raises InvalidConstraintError on malformed input.
    """
    raw = (text or "").strip()
    if not raw or raw.lower() == Constants.LATEST_KEYWORD:
        return VersionConstraint(raw=raw)

    parts = raw.split(",")
    if any(not p.strip() for p in parts):
        raise InvalidConstraintError(raw, "empty clause")
    return VersionConstraint(raw=raw, clauses=tuple(_parse_clause(raw, p) for p in parts))


def split_source_version(token: str) -> Tuple[str, Optional[str]]:
    """Split ``<source>@<constraint>`` into its parts; constraint may be absent."""
    token = token.strip()
    if "@" not in token:
        return token, None
    source, constraint = token.rsplit("@", 1)
    return source.strip(), constraint.strip() or None


def parse_module_source(source: str, default_host: Optional[str] = None) -> ModuleSource:
    """Parse ``<registry-host>/<namespace>/<name>/<provider>``.

    The host may be left out, in which case default_host (or the public
    registry host) is used.
    """
    raw = (source or "").strip()
    if not raw:
        raise InvalidModuleSourceError(source, "empty source")

    segments = raw.split("/")
    if len(segments) == 3:
        segments.insert(0, default_host or Constants.DEFAULT_REGISTRY_HOST)
    if len(segments) != 4:
        raise InvalidModuleSourceError(
            source, "expected <registry-host>/<namespace>/<name>/<provider>"
        )

    host, namespace, name, provider = segments
    if not host or "://" in raw:
        raise InvalidModuleSourceError(source, "registry host must be a bare hostname")
    for label, value in (("namespace", namespace), ("name", name), ("provider", provider)):
        if not _SOURCE_SEGMENT_RE.match(value):
            raise InvalidModuleSourceError(source, f"invalid {label} '{value}'")

    return ModuleSource(host=host.lower(), namespace=namespace, name=name, provider=provider)
