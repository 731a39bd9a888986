"""CLI entrypoint: Typer app definition and command registration"""

import logging
from typing import Annotated

import typer

from mdmeta.cli.commands import _settings, extract_cmd, generate_tags_cmd, update_cmd


USAGE = """\
Usage: mdmeta <command> [options]

Commands:
  extract-frontmatter <file-path> [--fields=field1,field2]
    Extract frontmatter from a markdown file

  update-frontmatter <file-path> [--update='{"field":"value"}' [--replace] | --set field="value" | --remove=field1,field2] [--create]
    Update frontmatter in a markdown file

  generate-tags <file-path-or-pattern> [--create]
    Generate AI-powered tags for a markdown file

Examples:
  mdmeta extract-frontmatter ./blog-post.md
  mdmeta extract-frontmatter ./blog-post.md --fields=title,author
  mdmeta update-frontmatter ./blog-post.md --update='{"title":"New Title"}'
  mdmeta update-frontmatter ./blog-post.md --set title="New Title" author="New Author"
  mdmeta update-frontmatter ./blog-post.md --remove=tags,draft
  mdmeta update-frontmatter ./blog-post.md --create --update='{"title":"New Post"}'
  mdmeta generate-tags ./blog-post.md
  mdmeta generate-tags './posts/*.md' --create"""


app = typer.Typer(name="mdmeta", add_completion=False, help="Read and update YAML frontmatter in markdown files")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress to stderr")] = False,
    ):
    """Configure logging; print usage and exit 1 when no command is given."""
    if ctx.invoked_subcommand is None:
        typer.echo(USAGE, err=True)
        raise typer.Exit(1)
    level = "DEBUG" if verbose else _settings().log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


app.command(name="extract-frontmatter")(extract_cmd)
app.command(name="update-frontmatter")(update_cmd)
app.command(name="generate-tags")(generate_tags_cmd)
