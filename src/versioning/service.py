"""Resolution service turning every outcome into an explicit result value."""

import logging
from typing import Iterable, List, Optional, Union

from common.logging_utils import extra_context, is_debug_enabled
from .models import ModuleVersionTag, ResolutionResult, ResolutionStatus, Tag
from .parser import InvalidConstraintError, parse_constraint, parse_tag
from .resolver import list_versions, resolve

logger = logging.getLogger(__name__)


class VersionResolutionService:
    """Resolve module constraints against a repository's tags.

    Malformed tags are filtered out, a constraint that matches nothing is
    reported as UNRESOLVED and a constraint that does not parse as
    INVALID_CONSTRAINT; nothing here raises for bad input.
    """

    def versions_for(self, tags: Iterable[Union[str, Tag]], module_id: str) -> List[ModuleVersionTag]:
        """List published versions of module_id, logging how many tags were skipped."""
        tags = list(tags)
        versions = list_versions(tags, module_id)
        if is_debug_enabled(logger):
            parsed = sum(1 for tag in tags if parse_tag(tag, module_id) is not None)
            logger.debug(
                "Scanned repository tags",
                extra=extra_context(
                    event="scan",
                    component="resolver",
                    action="list_versions",
                    target=module_id,
                    count=len(versions),
                    unmatched=len(tags) - parsed,
                    duplicates=parsed - len(versions),
                )
            )
        return versions

    def resolve_module(
        self,
        tags: Iterable[Union[str, Tag]],
        module_id: str,
        constraint_text: Optional[str] = None,
    ) -> ResolutionResult:
        """Resolve constraint_text for module_id over tags."""
        versions = self.versions_for(tags, module_id)
        available = tuple(mv.version_string for mv in versions)

        try:
            constraint = parse_constraint(constraint_text)
        except InvalidConstraintError as exc:
            logger.warning("%s", exc)
            return ResolutionResult(
                module_id=module_id,
                requested_constraint=constraint_text,
                status=ResolutionStatus.INVALID_CONSTRAINT,
                candidate_count=len(versions),
                error=str(exc),
                available=available,
            )

        picked = resolve(versions, constraint)
        if picked is None:
            error = (
                f"No version of '{module_id}' matches '{constraint.raw or 'latest'}'"
                if versions
                else f"No versions of '{module_id}' are published"
            )
            logger.info("%s", error)
            return ResolutionResult(
                module_id=module_id,
                requested_constraint=constraint_text,
                status=ResolutionStatus.UNRESOLVED,
                candidate_count=len(versions),
                error=error,
                available=available,
            )

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved module version",
                extra=extra_context(
                    event="decision",
                    component="resolver",
                    action="resolve",
                    target=module_id,
                    outcome="resolved",
                    kind=constraint.kind.value,
                    version=picked.version_string,
                )
            )
        logger.info("Resolved %s %s to %s", module_id, constraint.raw or "latest", picked.tag.name)
        return ResolutionResult(
            module_id=module_id,
            requested_constraint=constraint_text,
            status=ResolutionStatus.RESOLVED,
            resolved=picked,
            candidate_count=len(versions),
            available=available,
        )
