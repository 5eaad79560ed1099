# === FILE: site_crawler/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for SiteCrawler.

Commands:
  crawl     Crawl from seed URLs and print/save the result
  config    Show the effective configuration

Common options:
  --config PATH       YAML/JSON config (configs/default.yaml if omitted)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only if omitted)
  --log-format FORMAT Logging format string

crawl options:
  --depth INT                      Override max_depth
  --max-pages INT                  Override max_pages
  --concurrent INT                 Override concurrent_requests
  --delay MS                       Override delay_ms
  --user-agent TEXT                Override user_agent
  --timeout SEC                    Override the per-request timeout
  --respect-robots/--ignore-robots Override respect_robots_txt
  --output PATH                    Store pages as JSON Lines (.db/.sqlite -> SQLite)
  --json PATH                      Save a JSON report
  --html PATH                      Save an HTML report
  --template DIR                   Directory with report.html.j2
  --pretty                         Indent JSON written to stdout

Example:
  site-crawler crawl https://example.com/ --depth 2 --max-pages 50 --json report.json
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_crawler import __version__
from site_crawler.aggregator import aggregate_results
from site_crawler.config import CrawlerConfig, load_config
from site_crawler.engine import start_crawl
from site_crawler.logger import DEFAULT_FORMAT, init_logging
from site_crawler.report.html_report import render_html
from site_crawler.report.json_report import render_json
from site_crawler.storage import StorageError, open_store

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCrawler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file (configs/default.yaml if omitted).'
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
    help='Log file (stdout only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteCrawler command group."""
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
@click.argument('seed_urls', nargs=-1)
@click.option('--depth', '-d', 'max_depth', type=int, default=None, help='Maximum link depth')
@click.option('--max-pages', '-m', 'max_pages', type=int, default=None, help='Maximum pages to store')
@click.option('--concurrent', '-n', 'concurrent_requests', type=int, default=None, help='Number of workers')
@click.option('--delay', 'delay_ms', type=int, default=None, help='Pause after each fetch (ms)')
@click.option('--user-agent', 'user_agent', default=None, help='User-Agent header')
@click.option('--timeout', 'timeout', type=float, default=None, help='Per-request timeout (seconds)')
@click.option(
    '--respect-robots/--ignore-robots', 'respect_robots_txt',
    default=None,
    help='Honour robots.txt (default from config)'
)
@click.option(
    '--output', '-o', 'output_path',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Store pages in a JSON Lines file (.db/.sqlite for SQLite)'
)
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
    help='Directory with report.html.j2 (bundled template if omitted)'
)
@click.option('--pretty', is_flag=True, help='Indent JSON written to stdout')
@click.pass_context
def crawl(ctx, seed_urls, output_path, json_output, html_output, template_dir, pretty, **overrides):
    """Crawl from SEED_URLS (or seed_urls from the config) and report the result."""
    base_cfg: CrawlerConfig = ctx.obj['config']
    updates = {k: v for k, v in overrides.items() if v is not None}
    try:
        cfg = CrawlerConfig(**{**base_cfg.model_dump(), **updates})
    except ValidationError as e:
        print_error(f'Invalid configuration: {e}')

    seeds = list(seed_urls) or list(cfg.seed_urls)
    if not seeds:
        print_error('No seed URLs given (pass them as arguments or set seed_urls in the config)')

    try:
        store = open_store(output_path)
    except StorageError as e:
        print_error(f'Cannot open output: {e}')

    try:
        try:
            result = asyncio.run(start_crawl(cfg, seeds, store))
        except Exception as e:
            print_error(f'Crawl failed: {e}')

        if not json_output and not html_output:
            click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2 if pretty else None))
            return

        try:
            report = aggregate_results(result, store.get_all_pages())
        except StorageError as e:
            print_error(f'Cannot read stored pages: {e}')

        if json_output:
            try:
                saved_json = render_json(report, json_output)
                click.echo(f'JSON report: {saved_json}')
            except Exception as e:
                print_error(f'Failed to save JSON report: {e}')

        if html_output:
            try:
                saved_html = render_html(report, template_dir, html_output)
                click.echo(f'HTML report: {saved_html}')
            except Exception as e:
                print_error(f'Failed to save HTML report: {e}')
    finally:
        store.close()


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Print the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
