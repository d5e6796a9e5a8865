"""
Command-line entry point: `license-bom SPECIFIER... [--overrides FILE]`.

Exit codes: 0 when the scan completed (per-package errors are reported
inline), 1 when a requested package cannot be resolved, 2 when the override
document is invalid.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer

from license_bom.core.config import LICENSE_BOM_OVERRIDES, LOG_LEVEL, get_source_roots
from license_bom.core.exceptions import ConfigError, MissingPackageError
from license_bom.services.analysis_workflow import scan_packages
from license_bom.services.override_service import apply_overrides, load_overrides
from license_bom.services.report_service import render_json, render_licenses, render_matches

app = typer.Typer(add_completion=False)

EXIT_MISSING_PACKAGE = 1
EXIT_CONFIG_ERROR = 2


@app.command()
def main(
    specifiers: List[str] = typer.Argument(..., help="Package names or patterns such as 'colors.cmd.*'."),
    overrides: Optional[Path] = typer.Option(
        LICENSE_BOM_OVERRIDES, "--overrides", help="JSON file forcing the licenses of some packages."
    ),
    roots: Optional[List[Path]] = typer.Option(
        None, "--root", help="Source root to resolve packages from (repeatable, default: LICENSE_BOM_PATH)."
    ),
    workers: Optional[int] = typer.Option(None, "--workers", min=1),
    detail: bool = typer.Option(False, "--detail", help="Print raw template matches with scores."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of text."),
) -> None:
    """Lists the licenses of the given packages and of all their dependencies."""
    logging.basicConfig(level=LOG_LEVEL)

    try:
        override_map = load_overrides(overrides)
    except ConfigError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    source_roots = [str(r) for r in roots] if roots else get_source_roots()
    try:
        results = scan_packages(specifiers, roots=source_roots, workers=workers)
    except MissingPackageError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=EXIT_MISSING_PACKAGE)

    if detail:
        typer.echo(render_json(results) if as_json else render_matches(results))
        return

    licenses = apply_overrides(results, override_map)
    typer.echo(render_json(licenses) if as_json else render_licenses(licenses))


if __name__ == "__main__":
    app()
