"""Module version listing and constraint resolution over repository tags.

Both operations are pure: they read the caller's tags and constraint and
return new values without touching any shared state.
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

from .models import ModuleVersionTag, Tag, VersionConstraint
from .parser import parse_constraint, parse_tag


def _tie_break_key(mv: ModuleVersionTag) -> Tuple[str, str]:
    return (mv.tag.commit or "", mv.tag.name)


def list_versions(tags: Iterable[Union[str, Tag]], module_id: str) -> List[ModuleVersionTag]:
    """Return the module's published versions sorted ascending by precedence.

    When several tags share a precedence, the one with the lexicographically
    last commit id is kept (then the last tag name), so the result does not
    depend on input order.
    """
    best: Dict[Tuple, ModuleVersionTag] = {}
    for tag in tags:
        mv = parse_tag(tag, module_id)
        if mv is None:
            continue
        current = best.get(mv.precedence)
        if current is None or _tie_break_key(mv) > _tie_break_key(current):
            best[mv.precedence] = mv
    return sorted(best.values(), key=lambda mv: mv.version)


def filter_versions(
    versions: Iterable[ModuleVersionTag],
    constraint: VersionConstraint,
) -> List[ModuleVersionTag]:
    """Return versions allowed by the constraint, preserving order."""
    if not constraint.clauses:
        return [mv for mv in versions if not mv.version.prerelease]
    return [mv for mv in versions if constraint.allows(mv.version)]


def resolve(
    versions: Iterable[ModuleVersionTag],
    constraint: Union[str, VersionConstraint, None],
) -> Optional[ModuleVersionTag]:
    """Pick the highest version satisfying the constraint, or None.

    A constraint string is parsed first and may raise InvalidConstraintError.
    """
    if not isinstance(constraint, VersionConstraint):
        constraint = parse_constraint(constraint)

    matching = filter_versions(versions, constraint)
    if not matching:
        return None
    return max(matching, key=lambda mv: mv.version)
