"""Argument parsing functionality for modtag."""

import argparse
from constants import Constants


def _add_common_arguments(parser):
    """Options shared by every subcommand."""
    source_group = parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument("--tags-file",
                              dest="TAGS_FILE",
                              help="Read tags from a file, one '<tag> [commit]' per line",
                              action="store", type=str)
    source_group.add_argument("--repo",
                              dest="LOCAL_REPO",
                              help="Read tags from a local git checkout",
                              action="store", type=str)
    source_group.add_argument("--github",
                              dest="GITHUB_REPO",
                              help="Read tags from a GitHub repository (owner/repo)",
                              action="store", type=str)
    source_group.add_argument("--gitlab",
                              dest="GITLAB_REPO",
                              help="Read tags from a GitLab project (namespace/project)",
                              action="store", type=str)

    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json). Defaults to text.",
                        action="store",
                        type=str.lower,
                        choices=Constants.OUTPUT_FORMATS,
                        default="text")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: $MODTAG_LOG_LEVEL or WARNING)",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)


def _add_module_arguments(parser):
    module_group = parser.add_mutually_exclusive_group(required=True)
    module_group.add_argument("-m", "--module",
                              dest="MODULE_ID",
                              help="Module identifier used as tag prefix, e.g. s3-bucket",
                              action="store", type=str)
    module_group.add_argument("-s", "--source",
                              dest="MODULE_SOURCE",
                              help="Registry source <host>/<namespace>/<name>/<provider>; "
                                   "a trailing @<constraint> sets the version",
                              action="store", type=str)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="modtag",
        description="modtag - resolve infrastructure module versions from repository tags",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    list_parser = subparsers.add_parser(
        "list", help="List the published versions of a module")
    _add_module_arguments(list_parser)
    _add_common_arguments(list_parser)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve a version constraint to a published version")
    _add_module_arguments(resolve_parser)
    resolve_parser.add_argument("-v", "--version",
                                dest="CONSTRAINT",
                                help="Version constraint, e.g. '~> 1.1.0' or '>= 1.1.0, < 2.0.0' "
                                     "(default: latest)",
                                action="store", type=str)
    _add_common_arguments(resolve_parser)

    return parser.parse_args(argv)
