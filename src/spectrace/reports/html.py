"""
HTML rendering for traceability reports.

Renders the packaged Jinja2 template. Requires the ``html`` extra.
"""

from spectrace.validation.result import ValidationResult


def _environment():
    try:
        from jinja2 import Environment, PackageLoader, select_autoescape
    except ImportError as e:
        raise ImportError(
            "HTML reports require the html extra. Install with: pip install spectrace[html]"
        ) from e

    env = Environment(
        loader=PackageLoader("spectrace.reports", "templates"),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["status_class"] = lambda passed: "pass" if passed else "fail"
    return env


def format_html(result: ValidationResult) -> str:
    """Render ``result`` as a standalone HTML page.

    Raises:
        ImportError: If Jinja2 is not installed
    """
    template = _environment().get_template("report.html.j2")
    return template.render(
        result=result,
        stats=result.stats,
        sections=[
            ("Errors", "error", result.errors),
            ("Warnings", "warning", result.warnings),
            ("Info", "info", result.info),
        ],
    )
