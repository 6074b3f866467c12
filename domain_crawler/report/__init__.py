"""domain_crawler.report: JSON and HTML reports of a finished crawl."""

from domain_crawler.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from domain_crawler.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
