#!/usr/bin/env python3
"""
Resume Rendering CLI

Renders plain or Markdown resume text to PDF, inspects how text is parsed, and
validates rendered PDFs using the rendering context.

Commands:
    render   - Render a resume text file to PDF
    parse    - Show the parsed resume structure as YAML
    validate - Read back a rendered PDF and check footers and margins
    presets  - List available layout presets

Examples:\n

    render_resume.py render resume.md                           # Render to RESULTS_PATH

    render_resume.py render resume.md --out pdfs --preset a4    # A4 paper, custom folder

    render_resume.py render resume.txt --no-strip --validate    # Plain text, then validate

    render_resume.py parse resume.md                            # Inspect parsed structure

    render_resume.py validate outs/results/Jane_Doe_CV.pdf      # Validate a PDF
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from cvpress.contexts.parsing import parse_resume
from cvpress.contexts.parsing.logger import log_parse_summary, setup_parsing_logger
from cvpress.contexts.rendering import (
    SerializationError,
    default_filename,
    load_layout_config,
    render_model,
    save_pdf,
    validate_pdf,
)
from cvpress.contexts.rendering.logger import log_validation_result, setup_rendering_logger
from cvpress.contexts.rendering.styles import DEFAULT_LAYOUT_PATH
from cvpress.utils.markdown import strip_markup
from cvpress.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


app = typer.Typer(
    help="Render resume text to paginated PDF and validate rendered PDFs",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _read_text(path: Path) -> str:
    if not path.exists():
        typer.secho(f"Error: File not found: {path}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8")


def _load_config(config_path: Optional[Path], presets: List[str]):
    try:
        return load_layout_config(config_path=config_path, presets=presets)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("render")
def render_command(
    text_file: Annotated[Path, typer.Argument(help="Resume text or Markdown file")],
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output directory (default: RESULTS_PATH)"),
    ] = None,
    filename: Annotated[
        Optional[str],
        typer.Option("--filename", "-f", help="Output file name (default: <Name>_CV.pdf)"),
    ] = None,
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Layout preset to apply (repeatable, later wins)"),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML file with layout overrides"),
    ] = None,
    no_strip: Annotated[
        bool,
        typer.Option("--no-strip", help="Input is already plain text; skip Markdown stripping"),
    ] = False,
    validate: Annotated[
        bool,
        typer.Option("--validate", help="Read the PDF back and check footers and margins"),
    ] = False,
):
    """
    Render a resume text file to PDF.

    Examples:\n

        $ render_resume.py render resume.md                     # Default layout

        $ render_resume.py render resume.md -p a4 -p compact    # Combine presets
    """
    raw_text = _read_text(text_file)
    config = _load_config(config_path, presets or [])

    log_dir = LOGS_PATH / f"render_{now()}"
    setup_rendering_logger(log_dir, config=config)

    typer.secho(f"\nRendering: {text_file}", fg=typer.colors.BLUE, bold=True)
    if presets:
        typer.echo(f"Presets: {', '.join(presets)}")
    typer.echo("")

    model = parse_resume(raw_text if no_strip else strip_markup(raw_text))
    try:
        pdf_bytes = render_model(model, config)
    except SerializationError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output_path = save_pdf(
        pdf_bytes, filename or default_filename(model), output_dir or RESULTS_PATH
    )
    if output_path is None:
        typer.secho("✗ Could not write PDF (see log)", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)

    typer.secho("✓ Render succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Sections: {len(model.sections)}")
    typer.echo(f"  PDF: {output_path}")
    typer.echo(f"  Logs: {log_dir}")

    if validate:
        result = validate_pdf(pdf_bytes, config=config)
        log_validation_result(str(output_path), result)
        _report_validation(result)
        if not result.is_valid:
            raise typer.Exit(code=1)


@app.command("parse")
def parse_command(
    text_file: Annotated[Path, typer.Argument(help="Resume text or Markdown file")],
    no_strip: Annotated[
        bool,
        typer.Option("--no-strip", help="Input is already plain text; skip Markdown stripping"),
    ] = False,
):
    """
    Print the parsed resume structure as YAML.

    Useful for checking how headers, entries and skills were recognized before rendering.
    """
    raw_text = _read_text(text_file)
    setup_parsing_logger(LOGS_PATH / f"parse_{now()}")
    model = parse_resume(raw_text if no_strip else strip_markup(raw_text))
    log_parse_summary(model)
    if model.is_empty:
        typer.secho("No resume content found.", fg=typer.colors.YELLOW)
        raise typer.Exit()
    typer.echo(OmegaConf.to_yaml(OmegaConf.create(model.to_dict())))


@app.command("validate")
def validate_command(
    pdf_file: Annotated[Path, typer.Argument(help="Rendered resume PDF")],
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Layout preset the PDF was rendered with"),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML file the PDF was rendered with"),
    ] = None,
    pages: Annotated[
        Optional[int],
        typer.Option("--pages", help="Require exactly this many pages", min=1),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show every issue and warning"),
    ] = False,
):
    """Validate a rendered PDF: one correct footer per page, text inside the margins."""
    if not pdf_file.exists():
        typer.secho(f"Error: File not found: {pdf_file}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    config = _load_config(config_path, presets or [])
    result = validate_pdf(pdf_file, config=config, expected_pages=pages)
    typer.secho(f"\nValidating: {pdf_file}", fg=typer.colors.BLUE, bold=True)
    _report_validation(result, verbose=verbose)
    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command("presets")
def presets_command():
    """List layout presets defined in the packaged layout defaults."""
    presets = OmegaConf.load(DEFAULT_LAYOUT_PATH).get("presets") or {}
    typer.secho("\nAvailable presets:", bold=True)
    for name, settings in presets.items():
        keys = ", ".join(settings.keys())
        typer.echo(f"  {name:<12} overrides: {keys}")
    typer.echo("")


def _report_validation(result, verbose: bool = False) -> None:
    limit = None if verbose else 5
    if result.is_valid:
        typer.secho(f"✓ Validation passed ({result.page_count} pages)", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(f"✗ Validation failed ({len(result.issues)} issues)", fg=typer.colors.RED, bold=True)
        for issue in result.issues[:limit]:
            typer.echo(f"  - {issue}")
    if result.warnings:
        typer.secho(f"  {len(result.warnings)} warnings", fg=typer.colors.YELLOW)
        for warning in result.warnings[:limit]:
            typer.echo(f"  - {warning}")


if __name__ == "__main__":
    app()
