"""CLI entry point for openapi-llm-text."""

import logging
from pathlib import Path

import click
import yaml

from openapi_llm_text.llm import TokenCounter
from openapi_llm_text.parser.loader import DocumentError, load_document
from openapi_llm_text.renderer.text import render

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

DOC_SUFFIXES = (".json", ".yaml", ".yml")


def _convert_file(doc_path: Path) -> str:
    """Load and render one document, turning decode errors into CLI errors."""
    try:
        doc = load_document(doc_path)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Cannot decode {doc_path}: {e}")
    except DocumentError as e:
        raise click.ClickException(str(e))
    return render(doc)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option("--log-level", default="WARNING", envvar="OPENAPI_LLM_TEXT_LOG_LEVEL", show_default=True, help="Logging level.")
def main(verbose: bool, log_level: str):
    """openapi-llm-text: condense OpenAPI/Swagger documents into LLM-friendly text."""
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output text file (default: stdout).")
@click.option("--tokens", is_flag=True, help="Report the token count of the result on stderr.")
@click.option("--model", default=None, envvar="OPENAPI_LLM_TEXT_MODEL", help="Model used for token counting.")
def convert(doc_path: Path, output: Path | None, tokens: bool, model: str | None):
    """Convert one OpenAPI/Swagger document (JSON or YAML) to text."""
    text = _convert_file(doc_path)

    if output is None:
        click.echo(text, nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        click.echo(f"Summary saved to {output}", err=True)

    if tokens:
        counter = TokenCounter(model=model)
        click.echo(f"Tokens ({counter.model}): {counter.count(text)}", err=True)


@main.command()
@click.argument("input_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
def sync(input_dir: Path, output_dir: Path):
    """Convert every document in INPUT_DIR to OUTPUT_DIR/<name>.txt."""
    doc_paths = sorted(p for p in input_dir.iterdir() if p.is_file() and p.suffix.lower() in DOC_SUFFIXES)
    output_dir.mkdir(parents=True, exist_ok=True)

    for doc_path in doc_paths:
        click.echo(f"Processing {doc_path}...", err=True)
        out_path = output_dir / f"{doc_path.stem}.txt"
        out_path.write_text(_convert_file(doc_path), encoding="utf-8")
        click.echo(f"  Generated {out_path}", err=True)

    click.echo(f"Converted {len(doc_paths)} documents into {output_dir}", err=True)
