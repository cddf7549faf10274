"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    NO_VERSION_FOUND = 3
    INVALID_INPUT = 4


class TagSources(Enum):
    """Places tags can be read from.

    Args:
        Enum (string): Tag source names used on the command line.
    """

    FILE = "file"
    LOCAL = "local"
    GITHUB = "github"
    GITLAB = "gitlab"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEFAULT_REGISTRY_HOST = "registry.terraform.io"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    DEFAULT_LOG_LEVEL = "WARNING"
    ENV_LOG_LEVEL = "MODTAG_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    OUTPUT_FORMATS = ["text", "json"]
    LATEST_KEYWORD = "latest"

    # Repository API constants
    GITHUB_API_BASE = "https://api.github.com"
    GITLAB_API_BASE = "https://gitlab.com/api/v4"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_GITLAB_TOKEN = "GITLAB_TOKEN"
    REPO_API_PER_PAGE = 100
    REPO_API_MAX_PAGES = 50
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    HTTP_CACHE_TTL_SEC = 300

    GIT_COMMAND_TIMEOUT = 30
