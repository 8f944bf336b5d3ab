"""
Command Line Interface

Builds a changelog from a JSON file of GitHub pull requests.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from .builder import ChangelogBuilder
from .config import AppConfig, ConfigError, ConfigManager
from .github.parser import PullRequestParser, PullRequestParseError


logger = logging.getLogger(__name__)

app = typer.Typer(help="PR changelog builder")


@app.callback()
def main() -> None:
    """Render changelogs from merged pull requests."""


@app.command("generate")
def generate(
    prs: Path = typer.Option(..., "--prs", "-p", help="JSON file with a list of GitHub pull request objects"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML or JSON changelog configuration"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save the changelog to this file instead of printing"),
    sort: Optional[str] = typer.Option(None, "--sort", help="ASC or DESC, overrides the configuration"),
):
    """Generate a changelog from merged pull requests."""
    try:
        app_config = AppConfig.from_yaml(str(config)) if config else AppConfig.from_env()
        if sort is not None:
            app_config.changelog.sort = sort
        ConfigManager(app_config)
    except (FileNotFoundError, ConfigError, ValueError, TypeError) as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        items = json.loads(prs.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        typer.echo(f"Cannot read pull requests from {prs}: {e}", err=True)
        raise typer.Exit(code=1)

    if not isinstance(items, list):
        typer.echo(f"Expected a JSON list of pull requests in {prs}", err=True)
        raise typer.Exit(code=1)

    try:
        pull_requests = PullRequestParser().parse_pull_requests(items)
    except PullRequestParseError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    logger.debug(f"Loaded {len(pull_requests)} pull requests from {prs}")

    changelog = ChangelogBuilder(app_config.changelog).build(pull_requests)

    if output:
        output.write_text(changelog, encoding="utf-8")
        typer.echo(f"Changelog saved to {output}")
    else:
        typer.echo(changelog)


if __name__ == "__main__":
    app()
