# domain_crawler/report/json_report.py

"""
JSON report for DomainCrawler.

Serializes a CrawlResult to a file.
"""
import json
from pathlib import Path

from domain_crawler.crawler.models import CrawlResult


def render_json(result: CrawlResult, output_path: Path | str, pretty: bool = True) -> Path:
    """
    Save *result* as JSON at *output_path*.

    :param result: CrawlResult of a finished crawl
    :param output_path: path of the JSON file; parent folders are created
    :param pretty: indent the output by two spaces
    :return: Path of the saved file

    Example:
    ```python
    from domain_crawler.report.json_report import render_json
    report_path = render_json(result, 'reports/crawl.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
