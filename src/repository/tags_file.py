"""Load tags from a plain text listing (e.g. ``git show-ref --tags`` output)."""
from __future__ import annotations

import logging
from typing import List

from versioning.models import Tag

logger = logging.getLogger(__name__)


def parse_tag_lines(lines) -> List[Tag]:
    """Parse ``<tag> [commit]`` lines; blank lines and ``#`` comments are skipped.

    ``<commit> refs/tags/<tag>`` lines as printed by ``git show-ref`` are
    recognised too.
    """
    tags = []
    for line in lines:
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        fields = text.split()
        if len(fields) >= 2 and fields[1].startswith("refs/tags/"):
            name = fields[1][len("refs/tags/"):]
            if name.endswith("^{}"):
                # peeled line of an annotated tag; it replaces the tag object id
                name = name[:-3]
                tags = [t for t in tags if t.name != name]
            tags.append(Tag(name=name, commit=fields[0]))
            continue
        tags.append(Tag(name=fields[0], commit=fields[1] if len(fields) > 1 else ""))
    return tags


def load_tags_file(file_name: str) -> List[Tag]:
    """Read tags from file_name.

    Raises:
        OSError: if the file cannot be read.
    """
    with open(file_name, encoding="utf-8") as file:
        tags = parse_tag_lines(file)
    logger.info("Loaded %d tags from %s", len(tags), file_name)
    return tags
