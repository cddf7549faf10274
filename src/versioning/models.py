"""Data models for module version tags and constraint resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import semantic_version


class ConstraintKind(Enum):
    """Shape of a parsed version constraint."""
    EXACT = "exact"
    PESSIMISTIC = "pessimistic"
    RANGE = "range"
    LATEST = "latest"


class ResolutionStatus(Enum):
    """Outcome of a resolution request."""
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"
    INVALID_CONSTRAINT = "invalid_constraint"


@dataclass(frozen=True)
class Tag:
    """A tag as recorded by version control."""
    name: str
    commit: str = ""


@dataclass(frozen=True)
class ModuleVersionTag:
    """A tag naming a published module version, e.g. ``s3-bucket/v1.2.3``.

    ``version`` never carries build metadata so that it orders by semver
    precedence alone; the build part is kept separately for display.
    """
    module_id: str
    version: semantic_version.Version
    tag: Tag
    build: Tuple[str, ...] = ()

    @property
    def core(self) -> Tuple[int, int, int]:
        return (self.version.major, self.version.minor, self.version.patch)

    @property
    def precedence(self) -> Tuple[int, int, int, Tuple[str, ...]]:
        """Identity under semver precedence (build metadata excluded)."""
        return self.core + (tuple(self.version.prerelease),)

    @property
    def version_string(self) -> str:
        text = str(self.version)
        if self.build:
            text = f"{text}+{'.'.join(self.build)}"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "module": self.module_id,
            "version": self.version_string,
            "tag": self.tag.name,
            "commit": self.tag.commit or None,
        }


@dataclass(frozen=True)
class ConstraintClause:
    """One ``<operator> <version>`` term of a constraint.

    ``segments`` records how many numeric components were written (1-3);
    the pessimistic operator depends on it.
    """
    operator: str
    version: semantic_version.Version
    segments: int = 3

    def upper_bound(self) -> semantic_version.Version:
        """Exclusive upper bound of a ``~>`` clause."""
        v = self.version
        if self.segments >= 3:
            return semantic_version.Version(major=v.major, minor=v.minor + 1, patch=0)
        return semantic_version.Version(major=v.major + 1, minor=0, patch=0)

    def allows(self, candidate: semantic_version.Version) -> bool:
        op, v = self.operator, self.version
        if op == "=":
            return candidate == v
        if op == "!=":
            return candidate != v
        if op == ">":
            return candidate > v
        if op == ">=":
            return candidate >= v
        if op == "<":
            return candidate < v
        if op == "<=":
            return candidate <= v
        if op == "~>":
            return v <= candidate < self.upper_bound()
        raise ValueError(f"Unknown constraint operator: {op}")

    def __str__(self) -> str:
        parts = [str(self.version.major), str(self.version.minor), str(self.version.patch)]
        text = ".".join(parts[:self.segments])
        if self.version.prerelease:
            text = f"{text}-{'.'.join(self.version.prerelease)}"
        return f"{self.operator} {text}"


@dataclass(frozen=True)
class VersionConstraint:
    """Conjunction of clauses; no clauses means "latest"."""
    raw: str
    clauses: Tuple[ConstraintClause, ...] = ()

    @property
    def kind(self) -> ConstraintKind:
        if not self.clauses:
            return ConstraintKind.LATEST
        if len(self.clauses) == 1:
            if self.clauses[0].operator == "=":
                return ConstraintKind.EXACT
            if self.clauses[0].operator == "~>":
                return ConstraintKind.PESSIMISTIC
        return ConstraintKind.RANGE

    def allows(self, candidate: semantic_version.Version) -> bool:
        """Return True when candidate satisfies every clause.

        A prerelease only qualifies when some clause names a prerelease of
        the same major.minor.patch.
        """
        if candidate.prerelease:
            core = (candidate.major, candidate.minor, candidate.patch)
            named = any(
                c.version.prerelease and (c.version.major, c.version.minor, c.version.patch) == core
                for c in self.clauses
            )
            if not named:
                return False
        return all(clause.allows(candidate) for clause in self.clauses)

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.clauses)


@dataclass(frozen=True)
class ModuleSource:
    """A registry module address: ``<host>/<namespace>/<name>/<provider>``."""
    host: str
    namespace: str
    name: str
    provider: str

    @property
    def module_id(self) -> str:
        """Tag prefix under which releases of this module are published."""
        return self.name

    @property
    def address(self) -> str:
        return f"{self.host}/{self.namespace}/{self.name}/{self.provider}"


@dataclass
class ResolutionResult:
    """Resolution outcome to feed output rendering and logging."""
    module_id: str
    requested_constraint: Optional[str]
    status: ResolutionStatus
    resolved: Optional[ModuleVersionTag] = None
    candidate_count: int = 0
    error: Optional[str] = None
    available: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def resolved_version(self) -> Optional[str]:
        return self.resolved.version_string if self.resolved else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "module": self.module_id,
            "constraint": self.requested_constraint,
            "status": self.status.value,
            "resolved_version": self.resolved_version,
            "tag": self.resolved.tag.name if self.resolved else None,
            "commit": (self.resolved.tag.commit or None) if self.resolved else None,
            "candidate_count": self.candidate_count,
            "error": self.error,
            "available": list(self.available),
        }
