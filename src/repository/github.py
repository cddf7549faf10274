"""GitHub API client for repository tags.

Provides a lightweight REST client for listing the tags of a GitHub
repository, following the ``Link`` header for pagination.
"""
from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict, List, Optional

from constants import Constants
from common.http_client import get_json
from versioning.models import Tag

logger = logging.getLogger(__name__)

_NEXT_LINK_RE = re.compile(r'<([^>]+)>\s*;\s*rel="next"')


class GitHubClient:
    """Lightweight REST client for GitHub API operations.

    Supports optional authentication via GITHUB_TOKEN environment variable.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        """Initialize GitHub client.

        Args:
            base_url: Base URL for GitHub API (defaults to Constants.GITHUB_API_BASE)
            token: GitHub token (defaults to GITHUB_TOKEN env var)
        """
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip('/')
        self.token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN)

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {'Accept': 'application/vnd.github+json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def get_tags(self, owner: str, repo: str) -> List[Tag]:
        """Fetch repository tags with pagination.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            List of tags; empty when the repository is missing or unreachable
        """
        raw = self._get_paginated_results(
            f"{self.base_url}/repos/{owner}/{repo}/tags?per_page={Constants.REPO_API_PER_PAGE}"
        )
        tags = []
        for item in raw:
            if not isinstance(item, dict) or not item.get('name'):
                continue
            commit = item.get('commit') or {}
            tags.append(Tag(name=str(item['name']), commit=str(commit.get('sha') or '')))
        logger.info("Fetched %d tags from GitHub repository %s/%s", len(tags), owner, repo)
        return tags

    def _get_paginated_results(self, url: str) -> List[Dict[str, Any]]:
        """Fetch all pages of a Link-paginated endpoint."""
        results: List[Dict[str, Any]] = []
        current_url: Optional[str] = url
        pages = 0

        while current_url and pages < Constants.REPO_API_MAX_PAGES:
            status, headers, data = get_json(current_url, headers=self._get_headers())
            pages += 1

            if status != 200 or not isinstance(data, list):
                if status not in (200, 0):
                    logger.warning("GitHub API returned status %s for %s", status, url)
                break

            results.extend(data)
            current_url = self._next_link(headers)

        return results

    @staticmethod
    def _next_link(headers: Dict[str, str]) -> Optional[str]:
        """Return the rel="next" URL from a Link header, if any."""
        for key, value in headers.items():
            if key.lower() == 'link' and value:
                m = _NEXT_LINK_RE.search(value)
                if m:
                    return m.group(1)
        return None
