# === FILE: sitemap_scout/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for SitemapScout.

Commands:
  scrape    Discover pages from the sitemap, scrape them and print/save reports
  config    Show the effective configuration

Common options:
  --config PATH        Path to a YAML/JSON config file
  --root-url URL       Root sitemap URL (overrides root_url from the config)
  --concurrency INT    Max. page fetches in flight (overrides concurrency)
  --log-level LEVEL    Logging level (DEBUG, INFO, ...)
  --log-file PATH      Log file (stderr only if omitted)
  --log-format FORMAT  Logging format string

scrape options:
  --json PATH          Save the JSON report to a file
  --html PATH          Save the HTML report to a file
  --template DIR       Directory with a report.html.j2 Jinja2 template
  --pretty             Indent the JSON printed to stdout
  --scan-timeout SEC   Abort the whole run after SEC seconds

Also:
  --version, -v        Show the SitemapScout version

Example:
  sitemap-scout --root-url https://example.com/sitemap.xml scrape --json report.json
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import NoReturn

import click

from sitemap_scout import __version__
from sitemap_scout.aggregator import aggregate_results
from sitemap_scout.config import ScraperConfig, load_config
from sitemap_scout.engine import start_scan
from sitemap_scout.logger import DEFAULT_FORMAT, init_logging
from sitemap_scout.report.html_report import render_html
from sitemap_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str) -> NoReturn:
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _get_config(ctx: click.Context) -> ScraperConfig:
    """Load the config once per invocation and apply the command line overrides."""
    obj = ctx.obj
    if obj.get('config') is not None:
        return obj['config']

    config_path, overrides = obj['config_path'], obj['overrides']
    try:
        if config_path is None and 'root_url' in overrides:
            cfg = ScraperConfig(**overrides)
        else:
            cfg = load_config(config_path)
            if overrides:
                cfg = ScraperConfig(**{**cfg.model_dump(mode='json'), **overrides})
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')
    obj['config'] = cfg
    return cfg


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file (default: configs/default.yaml).'
)
@click.option(
    '--root-url', '-u', 'root_url',
    default=None,
    help='Root sitemap URL (overrides root_url from the config).'
)
@click.option(
    '--concurrency', '-n', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Max. number of page fetches in flight (overrides concurrency).'
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
    help='Path to a log file (stderr only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, root_url, concurrency, log_level, log_file, log_format):
    """SitemapScout: scrape SEO fields from every page listed in a sitemap."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    overrides = {}
    if root_url is not None:
        overrides['root_url'] = root_url
    if concurrency is not None:
        overrides['concurrency'] = concurrency
    ctx.ensure_object(dict)
    ctx.obj.update(config_path=config_path, overrides=overrides, config=None)


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with a report.html.j2 template (default: bundled template)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent the JSON printed to stdout (2 spaces)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Timeout for the whole run (seconds)'
)
@click.pass_context
def scrape(ctx, json_output, html_output, template_dir, pretty, scan_timeout):
    """Discover pages, scrape them and print or save the report."""
    cfg = _get_config(ctx)
    try:
        if scan_timeout:
            records = asyncio.run(
                asyncio.wait_for(start_scan(cfg), timeout=scan_timeout)
            )
        else:
            records = asyncio.run(start_scan(cfg))
    except asyncio.TimeoutError:
        print_error(f'Scrape did not finish within {scan_timeout} seconds')
    except Exception as e:
        print_error(f'Scrape failed: {e}')

    report = aggregate_results(records)

    # No report files requested: print to stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        click.echo(json.dumps(report.pages, ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = _get_config(ctx)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
