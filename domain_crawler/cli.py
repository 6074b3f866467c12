# === FILE: domain_crawler/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for DomainCrawler.

Commands:
  crawl URL   Crawl every page on URL's host, optionally saving reports
  config      Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  --concurrency N     Max concurrent requests (override max_concurrent_requests)
  --memory            Keep frontier/visited set in memory instead of Redis
  --reset             Clear the Redis frontier/visited keys first
  --json PATH         Save a JSON report
  --html PATH         Save an HTML report
  --template DIR      Folder with the Jinja2 report template
  --crawl-timeout SEC Abort the crawl after SEC seconds

Example:
  domain-crawler crawl https://example.com --memory --json crawl.json
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

import click

from domain_crawler import __version__
from domain_crawler.config import load_config
from domain_crawler.engine import start_crawl
from domain_crawler.logger import DEFAULT_FORMAT, init_logging
from domain_crawler.report.html_report import render_html
from domain_crawler.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def validate_start_url(url: str) -> Optional[str]:
    """Return an error message when *url* is not an absolute URL with a host."""
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError as exc:
        return f'Invalid start URL {url!r}: {exc}'
    if not parts.scheme or not host:
        return f'Invalid start URL {url!r}: an absolute URL with a host is required'
    return None


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='DomainCrawler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """DomainCrawler command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('start_url')
@click.option(
    '--concurrency', '-n', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Max concurrent requests (override max_concurrent_requests)'
)
@click.option('--memory', is_flag=True, help='Use the in-memory frontier and visited set')
@click.option('--reset', is_flag=True, help='Clear Redis frontier/visited keys before crawling')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Folder with the report.html.j2 Jinja2 template'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Abort the crawl after this many seconds'
)
@click.pass_context
def crawl(ctx, start_url, concurrency, memory, reset, json_output, html_output, template_dir, crawl_timeout):
    """Crawl every page reachable from START_URL on the same host."""
    error = validate_start_url(start_url)
    if error:
        print_error(error)

    cfg = ctx.obj['config']
    overrides = {}
    if concurrency is not None:
        overrides['max_concurrent_requests'] = concurrency
    if memory:
        overrides['store'] = 'memory'
    if reset:
        overrides['reset_store'] = True
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    click.echo(f'Starting crawl at: {start_url}')
    try:
        if crawl_timeout:
            result = asyncio.run(
                asyncio.wait_for(start_crawl(cfg, start_url), timeout=crawl_timeout)
            )
        else:
            result = asyncio.run(start_crawl(cfg, start_url))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    click.echo(
        f'Crawled {len(result.pages)} pages, {len(result.failures)} failed '
        f'in {result.stats.elapsed:.2f} s'
    )

    if json_output:
        try:
            saved_json = render_json(result, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(result, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Print the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(json.dumps(cfg.model_dump(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
