# site_crawler/__init__.py
"""
SiteCrawler package initializer.
Defines package version and exposes the CLI.
"""
__version__ = "0.1.0"

from .cli import cli  # noqa: E402

__all__ = ["cli", "__version__"]
