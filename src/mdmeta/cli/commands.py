"""CLI command implementations"""

import json
import re
from typing import Annotated, Optional

import typer

from mdmeta.config import Settings, load_config
from mdmeta.core.extract import extract_frontmatter
from mdmeta.core.tags import run_generate_tags
from mdmeta.core.update import remove_fields, update_fields, update_frontmatter
from mdmeta.errors import FrontmatterError
from mdmeta.llm.client import TagClient


_QUOTES_RE = re.compile(r'^["\']|["\']$')


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _split_list(value: str) -> list[str]:
    return [f.strip() for f in value.split(",") if f.strip()]


def _parse_assignments(pairs: list[str]) -> dict[str, str]:
    """Parse key="value" arguments; surrounding quotes are dropped."""
    fields = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if sep and key and value:
            fields[key] = _QUOTES_RE.sub("", value)
    return fields


def extract_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to read")],
    fields: Annotated[Optional[str], typer.Option("--fields", help="Comma-separated keys to return")] = None,
    ):
    """Print a file's frontmatter as JSON."""
    try:
        result = extract_frontmatter(path, _split_list(fields) if fields else None)
    except FrontmatterError as e:
        _fail(str(e))
    if result is None:
        typer.echo("No frontmatter found")
    else:
        typer.echo(json.dumps(result, indent=2, ensure_ascii=False, default=str))


def update_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to update")],
    pairs: Annotated[Optional[list[str]], typer.Argument(help='key="value" pairs for --set')] = None,
    update: Annotated[Optional[str], typer.Option("--update", help="JSON object of fields to merge in")] = None,
    replace: Annotated[bool, typer.Option("--replace", help="With --update, replace the whole frontmatter")] = False,
    set_: Annotated[bool, typer.Option("--set", help='Set the key="value" pairs that follow')] = False,
    remove: Annotated[Optional[str], typer.Option("--remove", help="Comma-separated keys to remove")] = None,
    create: Annotated[bool, typer.Option("--create", help="Create frontmatter if the file has none")] = False,
    ):
    """Update, set, or remove frontmatter fields."""
    settings = _settings(overrides={"create_if_missing": create or None})
    create_if_missing = settings.create_if_missing

    try:
        if update is not None:
            try:
                data = json.loads(update)
            except json.JSONDecodeError as e:
                _fail("--update expects a JSON object", e)
            if replace:
                update_frontmatter(path, data, create_if_missing)
            else:
                if not isinstance(data, dict):
                    _fail("--update expects a JSON object")
                update_fields(path, data, create_if_missing)
            typer.echo("Frontmatter updated successfully")
        elif set_:
            fields = _parse_assignments(pairs or [])
            if not fields:
                _fail('--set expects one or more key="value" pairs')
            update_fields(path, fields, create_if_missing)
            typer.echo("Fields updated successfully")
        elif remove is not None:
            remove_fields(path, _split_list(remove))
            typer.echo("Fields removed successfully")
        else:
            _fail("Nothing to do: pass --update, --set or --remove")
    except FrontmatterError as e:
        _fail(str(e))


def generate_tags_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file or glob pattern (* and ?)")],
    create: Annotated[bool, typer.Option("--create", help="Create frontmatter if a file has none")] = False,
    max_tags: Annotated[Optional[int], typer.Option("--max-tags", help="Max tags kept per file")] = None,
    ):
    """Generate AI tags and write them into the frontmatter."""
    settings = _settings(overrides={"create_if_missing": create or None, "max_tags": max_tags})
    try:
        client = TagClient(settings)
    except ValueError as e:
        _fail(str(e))

    try:
        tagged, failed = run_generate_tags(
            path, client.generate, settings.create_if_missing, settings.max_tags,
        )
    except FrontmatterError as e:
        _fail(f"Failed to generate tags: {e}")

    for src, tags in tagged:
        typer.echo(f"  {src}: {', '.join(tags)}")
    for src, error in failed:
        typer.echo(f"  failed: {src}: {error}", err=True)
    if not tagged and not failed:
        typer.echo("No files found matching the pattern")
    typer.echo("Tags generated successfully")
