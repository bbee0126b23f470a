"""git-source: trait-composed git branch sources and push-notification routing."""

__version__ = "0.1.0"
