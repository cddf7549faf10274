"""Module version tag parsing and constraint resolution."""

from .models import ModuleVersionTag, ResolutionResult, ResolutionStatus, Tag, VersionConstraint
from .parser import InvalidConstraintError, parse_constraint, parse_tag
from .resolver import list_versions, resolve

__all__ = [
    "ModuleVersionTag",
    "ResolutionResult",
    "ResolutionStatus",
    "Tag",
    "VersionConstraint",
    "InvalidConstraintError",
    "parse_constraint",
    "parse_tag",
    "list_versions",
    "resolve",
]
