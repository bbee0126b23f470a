"""HTTP API for git-source."""
