"""Repository tag sources (GitHub, GitLab, local git, tag files)."""
