"""KeyGuard — exposed credential detection for web page content."""

__version__ = "0.1.0"
