#!/usr/bin/env python3
"""
Resume Tailoring CLI

Asks a language model to tailor an existing resume to a job description, then
renders the result to PDF.

Examples:\n

    tailor_resume.py resume.md job.txt                              # Provider from LLM_PROVIDER

    tailor_resume.py resume.md job.txt --provider anthropic         # Use Claude

    tailor_resume.py resume.md job.txt -m gpt-4o-mini --out pdfs    # Specific model and folder

    tailor_resume.py resume.md job.txt --save-text                  # Also keep the generated text
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvpress.contexts.generation import GenerationError, ResumeWriter
from cvpress.contexts.generation.logger import setup_generation_logger
from cvpress.contexts.rendering import SerializationError, load_layout_config, save_pdf
from cvpress.pipeline import tailor_resume
from cvpress.utils.llm import get_provider
from cvpress.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))

app = typer.Typer(add_completion=False)


@app.command()
def main(
    resume_file: Annotated[Path, typer.Argument(help="Current resume (text or Markdown)")],
    job_file: Annotated[Path, typer.Argument(help="Job description text")],
    provider_name: Annotated[
        Optional[str],
        typer.Option("--provider", help="LLM provider: openai or anthropic (default: LLM_PROVIDER)"),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Model name (default: provider default)"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output directory (default: RESULTS_PATH)"),
    ] = None,
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Layout preset to apply (repeatable)"),
    ] = None,
    save_text: Annotated[
        bool,
        typer.Option("--save-text", help="Also save the generated resume text next to the PDF"),
    ] = False,
):
    """Generate a tailored resume and render it to PDF."""
    for path in (resume_file, job_file):
        if not path.exists():
            typer.secho(f"Error: File not found: {path}\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    try:
        config = load_layout_config(presets=presets or [])
        provider = get_provider(provider_name, model)
    except (ValueError, ImportError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_dir = LOGS_PATH / f"tailor_{now()}"
    setup_generation_logger(log_dir, provider_name=provider.name)

    typer.secho(f"\nTailoring: {resume_file} -> {job_file}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Provider: {provider.name}")
    typer.echo("")

    try:
        result = tailor_resume(
            resume_file.read_text(encoding="utf-8"),
            job_file.read_text(encoding="utf-8"),
            ResumeWriter(provider),
            config=config,
        )
    except (GenerationError, SerializationError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    target_dir = output_dir or RESULTS_PATH
    output_path = save_pdf(result.pdf_bytes, result.filename, target_dir)
    if output_path is None:
        typer.secho("✗ Could not write PDF (see log)", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)

    if save_text:
        text_path = output_path.with_suffix(".txt")
        text_path.write_text(result.text, encoding="utf-8")
        typer.echo(f"  Text: {text_path}")

    typer.secho("✓ Tailored resume rendered", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Name: {result.model.header.name or '(none)'}")
    typer.echo(f"  Sections: {', '.join(result.model.sections) or '(none)'}")
    typer.echo(f"  PDF: {output_path}")
    typer.echo(f"  Logs: {log_dir}")


if __name__ == "__main__":
    app()
