"""GitLab API client for repository tags.

Provides a lightweight REST client for listing the tags of a GitLab
project, following GitLab's header-based pagination.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json
from versioning.models import Tag

logger = logging.getLogger(__name__)


class GitLabClient:
    """Lightweight REST client for GitLab API operations.

    Supports optional authentication via GITLAB_TOKEN environment variable.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        """Initialize GitLab client.

        Args:
            base_url: Base URL for GitLab API (defaults to Constants.GITLAB_API_BASE)
            token: GitLab personal access token (defaults to GITLAB_TOKEN env var)
        """
        self.base_url = (base_url or Constants.GITLAB_API_BASE).rstrip('/')
        self.token = token or os.environ.get(Constants.ENV_GITLAB_TOKEN)

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {}
        if self.token:
            headers['Private-Token'] = self.token
        return headers

    def get_tags(self, owner: str, repo: str) -> List[Tag]:
        """Fetch project tags with pagination.

        Args:
            owner: Project owner/namespace (may contain subgroups)
            repo: Project name

        Returns:
            List of tags; empty when the project is missing or unreachable
        """
        project_path = quote(f"{owner}/{repo}", safe='')
        raw = self._get_paginated_results(
            f"{self.base_url}/projects/{project_path}/repository/tags"
        )
        tags = []
        for item in raw:
            if not isinstance(item, dict) or not item.get('name'):
                continue
            commit = item.get('commit') or {}
            tags.append(Tag(name=str(item['name']), commit=str(commit.get('id') or '')))
        logger.info("Fetched %d tags from GitLab project %s/%s", len(tags), owner, repo)
        return tags

    def _get_paginated_results(self, url: str) -> List[Dict[str, Any]]:
        """Fetch all pages of a paginated endpoint.

        Args:
            url: Base URL for paginated endpoint

        Returns:
            List of all results across pages
        """
        results: List[Dict[str, Any]] = []
        current_url: Optional[str] = f"{url}?per_page={Constants.REPO_API_PER_PAGE}"
        pages = 0

        while current_url and pages < Constants.REPO_API_MAX_PAGES:
            status, headers, data = get_json(current_url, headers=self._get_headers())
            pages += 1

            if status != 200 or not data:
                if status not in (200, 0):
                    logger.warning("GitLab API returned status %s for %s", status, url)
                break

            results.extend(data)

            current_page = self._get_header_int(headers, 'x-page')
            total_pages = self._get_header_int(headers, 'x-total-pages')

            if current_page and total_pages and current_page < total_pages:
                next_page = current_page + 1
                current_url = f"{url}?per_page={Constants.REPO_API_PER_PAGE}&page={next_page}"
            else:
                current_url = None

        return results

    @staticmethod
    def _get_header_int(headers: Dict[str, str], name: str) -> Optional[int]:
        """Extract an integer pagination header, matching the name case-insensitively."""
        for key, value in headers.items():
            if key.lower() == name:
                try:
                    return int(value)
                except (TypeError, ValueError):
                    return None
        return None
