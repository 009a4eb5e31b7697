# File: sitemap_scout/report/html_report.py
"""sitemap_scout.report.html_report: HTML report generation with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, PackageLoader, select_autoescape

from sitemap_scout.aggregator import ScrapeReport

TEMPLATE_NAME = "report.html.j2"


def render_html(
    report: ScrapeReport,
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
) -> Path:
    """Render the HTML report from the template and save it at the given path.

    Args:
        report: ScrapeReport object.
        template_dir: directory with a ``report.html.j2`` Jinja2 template;
            ``None`` uses the template shipped with the package.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.

    Example:
    ```python
    from sitemap_scout.report.html_report import render_html
    html_path = render_html(report, template_dir=None, output_path='reports/report.html')
    ```
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if template_dir is None:
        loader = PackageLoader("sitemap_scout", "templates")
    else:
        loader = FileSystemLoader(str(template_dir))
    env = Environment(loader=loader, autoescape=select_autoescape(["html", "xml", "j2"]))
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "pages": report.pages,
        "summary": report.summary,
    }

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
