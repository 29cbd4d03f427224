"""serde-regex command line.

Usage:
    serde-regex check rules.yaml --kind regex --shape map
    serde-regex check sets.json --kind set --shape list --config re2.yaml

``check`` decodes every pattern in the file with the requested shape and
prints the re-encoded document. A pattern that does not compile is reported
with its location and RE2's diagnostic, and the exit status is 1.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from serde_regex import __version__
from serde_regex._config import DEFAULT_CONFIG, RegexConfig, parse_regex_config
from serde_regex._errors import ConfigParseError, DecodeError
from serde_regex._formats import from_json, from_yaml, to_json, to_yaml
from serde_regex._kinds import BytesRegex, BytesRegexSet, Regex, RegexSet

KINDS: dict[str, Any] = {
    "regex": Regex,
    "bytes": BytesRegex,
    "set": RegexSet,
    "bytes-set": BytesRegexSet,
}

SHAPES = ("single", "optional", "list", "map")


def build_shape(kind: str, shape: str) -> Any:
    """Return the type expression for a --kind / --shape pair."""
    element = KINDS[kind]
    match shape:
        case "single":
            return element
        case "optional":
            return element | None
        case "list":
            return list[element]
        case "map":
            return dict[str, element]
    msg = f"unknown shape: {shape!r}"
    raise ValueError(msg)


def _detect_format(path: Path, fmt: str | None) -> str:
    if fmt is not None:
        return fmt
    return "json" if path.suffix.lower() == ".json" else "yaml"


def _load_config(path: str | None) -> RegexConfig:
    if path is None:
        return DEFAULT_CONFIG
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    return parse_regex_config(data or {})


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log compile failures at DEBUG level")
def main(verbose: bool) -> None:
    """Validate and normalise serialized regular expressions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--kind", type=click.Choice(list(KINDS)), default="regex", show_default=True)
@click.option("--shape", type=click.Choice(SHAPES), default="single", show_default=True)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "yaml"]),
    default=None,
    help="Input format (default: from the file suffix, YAML unless .json)",
)
@click.option("--config", "config_path", default=None, help="YAML file with RE2 options")
def check(file: str, kind: str, shape: str, fmt: str | None, config_path: str | None) -> None:
    """Decode FILE and print it re-encoded."""
    path = Path(file)
    fmt = _detect_format(path, fmt)
    text = path.read_text(encoding="utf-8")
    target = build_shape(kind, shape)

    try:
        config = _load_config(config_path)
    except ConfigParseError as e:
        click.echo(f"invalid config: {e}", err=True)
        sys.exit(2)

    try:
        if fmt == "json":
            value = from_json(text, target, config)
            click.echo(to_json(value, target, indent=2))
        else:
            value = from_yaml(text, target, config)
            click.echo(to_yaml(value, target), nl=False)
    except DecodeError as e:
        # A rejected source may hold lone surrogates, which cannot be printed.
        message = f"{file}: {e}".encode("utf-8", "backslashreplace").decode("utf-8")
        click.echo(message, err=True)
        sys.exit(1)


@main.command()
def version() -> None:
    """Print the package version."""
    click.echo(__version__)
