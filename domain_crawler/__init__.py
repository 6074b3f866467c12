"""
DomainCrawler package initializer.
Defines the package version and exposes the CLI.
"""
__version__ = "0.1.0"

from domain_crawler.cli import cli  # noqa: E402

__all__ = ["cli", "__version__"]
