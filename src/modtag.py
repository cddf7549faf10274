"""modtag - resolve infrastructure module versions from repository tags.

    Returns:
        int: Exit code
"""
import json
import logging
import sys
from typing import List, Optional, Tuple

from args import parse_args
from cli_config import ConfigError, apply_config_overrides, load_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes, TagSources
from repository.github import GitHubClient
from repository.gitlab import GitLabClient
from repository.local_git import GitCommandError, LocalGitTags
from repository.tags_file import load_tags_file
from versioning.models import ResolutionStatus, Tag
from versioning.parser import InvalidModuleSourceError, parse_module_source, split_source_version
from versioning.service import VersionResolutionService

logger = logging.getLogger(__name__)


def _split_owner_repo(value: str) -> Tuple[str, str]:
    """Split ``owner/repo``; the owner part may hold GitLab subgroups."""
    value = value.strip().strip("/")
    if "/" not in value:
        raise ValueError(f"Expected <owner>/<repo>, got '{value}'")
    owner, repo = value.rsplit("/", 1)
    if not owner or not repo:
        raise ValueError(f"Expected <owner>/<repo>, got '{value}'")
    return owner, repo


def tag_source_kind(args) -> TagSources:
    """Return which tag source the parsed arguments select."""
    if getattr(args, "TAGS_FILE", None):
        return TagSources.FILE
    if getattr(args, "LOCAL_REPO", None):
        return TagSources.LOCAL
    if getattr(args, "GITHUB_REPO", None):
        return TagSources.GITHUB
    return TagSources.GITLAB


def fetch_tags(args) -> List[Tag]:
    """Collect tags from the source selected on the command line.

    Raises:
        OSError: tag file unreadable.
        GitCommandError: local repository unreadable.
        ValueError: malformed owner/repo argument.
    """
    kind = tag_source_kind(args)
    if is_debug_enabled(logger):
        logger.debug(
            "Fetching tags",
            extra=extra_context(event="function_entry", component="cli", action="fetch_tags", target=kind.value)
        )
    if kind == TagSources.FILE:
        return load_tags_file(args.TAGS_FILE)
    if kind == TagSources.LOCAL:
        return LocalGitTags().get_tags(args.LOCAL_REPO)
    if kind == TagSources.GITHUB:
        owner, repo = _split_owner_repo(args.GITHUB_REPO)
        return GitHubClient().get_tags(owner, repo)
    owner, repo = _split_owner_repo(args.GITLAB_REPO)
    return GitLabClient().get_tags(owner, repo)


def module_request(args) -> Tuple[str, Optional[str]]:
    """Return (module_id, constraint) from --module/--source and --version.

    An explicit --version wins over a constraint appended to --source.

    Raises:
        InvalidModuleSourceError: malformed --source.
    """
    constraint = getattr(args, "CONSTRAINT", None)
    if getattr(args, "MODULE_SOURCE", None):
        source_text, source_constraint = split_source_version(args.MODULE_SOURCE)
        source = parse_module_source(source_text)
        logger.info("Module source %s uses tag prefix '%s'", source.address, source.module_id)
        return source.module_id, constraint if constraint is not None else source_constraint
    return args.MODULE_ID, constraint


def _write(text: str) -> None:
    sys.stdout.write(text + "\n")


def run_list(args, service: VersionResolutionService, tags: List[Tag], module_id: str) -> int:
    versions = service.versions_for(tags, module_id)
    if args.OUTPUT_FORMAT == "json":
        _write(json.dumps({"module": module_id, "versions": [mv.to_dict() for mv in versions]}, indent=2))
    else:
        for mv in versions:
            _write(f"{mv.version_string}\t{mv.tag.name}\t{mv.tag.commit}".rstrip())
    if not versions:
        logger.warning("No versions of '%s' found", module_id)
        return ExitCodes.NO_VERSION_FOUND.value
    return ExitCodes.SUCCESS.value


def run_resolve(args, service: VersionResolutionService, tags: List[Tag], module_id: str,
                constraint: Optional[str]) -> int:
    result = service.resolve_module(tags, module_id, constraint)
    if args.OUTPUT_FORMAT == "json":
        _write(json.dumps(result.to_dict(), indent=2))
    elif result.status == ResolutionStatus.RESOLVED:
        _write(f"{result.resolved_version}\t{result.resolved.tag.name}\t{result.resolved.tag.commit}".rstrip())
    else:
        sys.stderr.write(f"Error: {result.error}\n")
        if result.status == ResolutionStatus.UNRESOLVED and result.available:
            sys.stderr.write(f"Available versions: {', '.join(result.available)}\n")

    if result.status == ResolutionStatus.INVALID_CONSTRAINT:
        return ExitCodes.INVALID_INPUT.value
    if result.status == ResolutionStatus.UNRESOLVED:
        return ExitCodes.NO_VERSION_FOUND.value
    return ExitCodes.SUCCESS.value


def main(argv=None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(getattr(args, "LOG_FILE", None), level=getattr(args, "LOG_LEVEL", None))

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        apply_config_overrides(load_config(getattr(args, "CONFIG", None)))
    except ConfigError as exc:
        logger.error("%s", exc)
        return ExitCodes.FILE_ERROR.value

    try:
        module_id, constraint = module_request(args)
    except InvalidModuleSourceError as exc:
        logger.error("%s", exc)
        return ExitCodes.INVALID_INPUT.value

    try:
        tags = fetch_tags(args)
    except OSError as exc:
        logger.error("Unable to read tags: %s", exc)
        return ExitCodes.FILE_ERROR.value
    except GitCommandError as exc:
        logger.error("%s", exc)
        return ExitCodes.FILE_ERROR.value
    except ValueError as exc:
        logger.error("%s", exc)
        return ExitCodes.INVALID_INPUT.value

    if not tags and tag_source_kind(args) in (TagSources.GITHUB, TagSources.GITLAB):
        logger.warning("No tags returned by %s; check the repository name and token", tag_source_kind(args).value)

    service = VersionResolutionService()
    if args.action == "list":
        return run_list(args, service, tags, module_id)
    return run_resolve(args, service, tags, module_id, constraint)


if __name__ == "__main__":
    sys.exit(main())
