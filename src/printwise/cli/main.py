"""Printwise CLI - find the best filament for a 3D print.

Usage:
    printwise recommend <project...> [--strength N] [--flexibility N] [--detail N]
                        [--outdoor] [--food-safe] [--explain] [--json]
    printwise materials [--json]
    printwise init [--force] [--json]

Every subcommand that produces data supports ``--json`` for
machine-parseable output.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import click

from printwise import __version__
from printwise.catalog import all_materials
from printwise.cli.config import SLIDER_MAX, SLIDER_MIN, init_config, load_config
from printwise.cli.exit_codes import SUCCESS, exit_code_for
from printwise.cli.output import (
    format_error,
    format_materials,
    format_recommendation,
    format_response,
)
from printwise.log_config import configure_logging
from printwise.recommender import PreferenceInput, recommend, score_candidates

logger = logging.getLogger(__name__)

_SLIDER = click.IntRange(SLIDER_MIN, SLIDER_MAX, clamp=True)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _emit(output: str, exit_code: int = SUCCESS) -> None:
    """Print output and exit with the given code."""
    click.echo(output)
    sys.exit(exit_code)


def _emit_error(code: str, message: str, json_mode: bool) -> None:
    """Emit a structured error and exit."""
    _emit(format_error(message, code, json_mode=json_mode), exit_code_for(code))


def _build_preferences(ctx: click.Context, project: str, **flags: Any) -> PreferenceInput:
    """Resolve flags against env and config file into one submission."""
    config = load_config(config_path=ctx.obj.get("config_path"), **flags)
    return PreferenceInput(
        strength=config["strength"],
        flexibility=config["flexibility"],
        detail=config["detail"],
        outdoor=config["outdoor"],
        food_safe=config["food_safe"],
        project_description=project,
    )


# ------------------------------------------------------------------
# CLI group
# ------------------------------------------------------------------


@click.group()
@click.option(
    "--config",
    "config_path",
    envvar="PRINTWISE_CONFIG",
    default=None,
    type=click.Path(dir_okay=False),
    help="Config file (default ~/.printwise/config.yaml).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Write debug logs to the log file.")
@click.version_option(version=__version__, prog_name="printwise")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Find the best filament and print settings for a 3D print."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if verbose:
        configure_logging(level="DEBUG")
    elif os.environ.get("PRINTWISE_LOG_DIR"):
        configure_logging()


# ------------------------------------------------------------------
# recommend
# ------------------------------------------------------------------


@cli.command("recommend")
@click.argument("project", nargs=-1)
@click.option("--strength", type=_SLIDER, default=None, help="How strong the part must be (1-10).")
@click.option("--flexibility", type=_SLIDER, default=None, help="How flexible the part must be (1-10).")
@click.option("--detail", type=_SLIDER, default=None, help="How much surface detail matters (1-10).")
@click.option("--outdoor/--no-outdoor", default=None, help="Part will be used outdoors.")
@click.option("--food-safe/--no-food-safe", "food_safe", default=None, help="Part must be food safe.")
@click.option("--explain", is_flag=True, default=False, help="Show the score of every material.")
@click.option("--json", "json_mode", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def recommend_cmd(
    ctx: click.Context,
    project: tuple[str, ...],
    strength: int | None,
    flexibility: int | None,
    detail: int | None,
    outdoor: bool | None,
    food_safe: bool | None,
    explain: bool,
    json_mode: bool,
) -> None:
    """Recommend a filament for PROJECT (e.g. "phone case")."""
    description = " ".join(project).strip()
    if not description:
        _emit_error("INVALID_INPUT", "Describe what you are printing.", json_mode)

    preferences = _build_preferences(
        ctx,
        description,
        strength=strength,
        flexibility=flexibility,
        detail=detail,
        outdoor=outdoor,
        food_safe=food_safe,
    )
    logger.debug("Preferences: %s", preferences)

    result = recommend(preferences)
    candidates = None
    if explain:
        candidates = [c.to_dict() for c in score_candidates(preferences)]

    output = format_recommendation(
        description,
        result.to_dict(),
        candidates,
        json_mode=json_mode,
    )
    _emit(output, SUCCESS)


# ------------------------------------------------------------------
# materials
# ------------------------------------------------------------------


@cli.command()
@click.option("--json", "json_mode", is_flag=True, default=False, help="Output as JSON.")
def materials(json_mode: bool) -> None:
    """List the filaments Printwise can recommend."""
    output = format_materials([m.to_dict() for m in all_materials()], json_mode=json_mode)
    _emit(output, SUCCESS)


# ------------------------------------------------------------------
# init
# ------------------------------------------------------------------


@cli.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
@click.option("--json", "json_mode", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def init(ctx: click.Context, force: bool, json_mode: bool) -> None:
    """Write a config file with the default preferences."""
    try:
        path = init_config(ctx.obj.get("config_path"), force=force)
    except FileExistsError as exc:
        _emit_error("CONFIG_EXISTS", f"{exc}. Use --force to overwrite.", json_mode)
    except OSError as exc:
        _emit_error("CONFIG_ERROR", f"Could not write config: {exc}", json_mode)

    output = format_response(
        "success",
        data={"config_path": str(path)},
        json_mode=json_mode,
    )
    _emit(output, SUCCESS)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
