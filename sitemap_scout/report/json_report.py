# sitemap_scout/report/json_report.py

"""
JSON report generation for SitemapScout.

Serializes a ScrapeReport to a file.
"""
from pathlib import Path

from sitemap_scout.aggregator import ScrapeReport


def render_json(report: ScrapeReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at the given path.

    :param report: ScrapeReport with the scraped pages
    :param output_path: path of the JSON file
    :param pretty: indent the output by 2 spaces
    :return: Path of the saved file

    Example:
    ```python
    from sitemap_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    output.write_text(report.json(pretty=pretty), encoding="utf-8")

    return output
