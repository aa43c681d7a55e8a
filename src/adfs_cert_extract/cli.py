"""
Command line — option parsing, validation and the usage text.

Parsing and validation return Results instead of exiting: the composition
root decides what to print and which status to exit with.

  parse_arguments(argv)        → Result[CommandLine]
  validate_arguments(cl)       → Result[InvocationConfig]
  format_usage() / print_usage()

Options are declared once in OPTIONS; both the argparse registration and the
usage text are derived from that table.
"""

from __future__ import annotations

import argparse
import os.path
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence
from urllib.parse import urlsplit

import structlog
from railway import ErrorCode
from railway.result import Result

from adfs_cert_extract.domain.models import CommandLine, InvocationConfig

log = structlog.get_logger()

PROG = "adfs-cert-extract"
DESCRIPTION = "Extract the signing cert from an ADFS federation service."
ATTRIBUTION = "Kristofer Källsbo 2017"

URL_REQUIRED = "ADFS url is required!"
OUTPUT_REQUIRED = "Output path for certificate is required!"
OUTPUT_MISSING = "Output path doesn't exist or is not accessible!"


@dataclass(frozen=True, slots=True)
class Option:
    """One command-line option; `metavar` is None for boolean flags."""

    short: str
    long: str
    dest: str
    help: str
    metavar: str | None = None

    @property
    def signature(self) -> str:
        """Flag spelling as shown in the usage text, e.g. '-u, --url=URL'."""
        value = f"={self.metavar}" if self.metavar else ""
        return f"{self.short}, {self.long}{value}"


OPTIONS: tuple[Option, ...] = (
    Option("-u", "--url", "url", "ADFS url (required)", metavar="URL"),
    Option("-o", "--output", "output", "Output path for certificate (required)", metavar="PATH"),
    Option("-h", "--help", "show_help", "show this message and exit"),
)


class _OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing to stderr and exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ValueError(message)


def build_parser() -> argparse.ArgumentParser:
    """Register every entry of OPTIONS on a fresh parser."""
    parser = _OptionParser(prog=PROG, add_help=False, exit_on_error=False)
    for option in OPTIONS:
        if option.metavar is None:
            parser.add_argument(option.short, option.long, dest=option.dest, action="store_true", help=option.help)
        else:
            parser.add_argument(
                option.short, option.long, dest=option.dest, metavar=option.metavar, default=None, help=option.help
            )
    return parser


def _to_command_line(argv: Sequence[str]) -> CommandLine:
    namespace, extras = build_parser().parse_known_args(list(argv))
    if extras:
        log.debug("cli.ignored_arguments", arguments=extras)
    return CommandLine(url=namespace.url, output=namespace.output, show_help=namespace.show_help)


def parse_arguments(argv: Sequence[str]) -> Result[CommandLine]:
    """
    Parse raw arguments without validating them.

    Returns Result.failure(VALIDATION_ERROR, ...) for a malformed command
    line, e.g. an option given without its value. Unknown arguments are
    ignored.
    """
    return Result.from_computation(
        lambda: _to_command_line(argv),
        ErrorCode.VALIDATION_ERROR,
        "Invalid command line",
    )


def _require(value: str | None, message: str) -> Result[str]:
    return Result.from_optional(value or None, message)


def _existing_directory(output: str) -> Result[Path]:
    # os.path.isdir reports an unreadable path as missing instead of raising.
    return (
        Result.success(output)
        .ensure(os.path.isdir, ErrorCode.VALIDATION_ERROR, OUTPUT_MISSING)
        .map(Path)
    )


def _host_of(url: str) -> str:
    parts = urlsplit(url)
    host = parts.hostname
    if not parts.scheme or not host:
        raise ValueError(f"{url!r} is not an absolute URI with a host")
    return host


def resolve_host(url: str) -> Result[str]:
    """Host component of `url`; VALIDATION_ERROR if it is not an absolute URI."""
    return Result.from_computation(
        lambda: _host_of(url),
        ErrorCode.VALIDATION_ERROR,
        "Malformed url",
    )


def validate_arguments(command_line: CommandLine) -> Result[InvocationConfig]:
    """
    Build the immutable InvocationConfig, or the first validation failure.

    Checks, in order: url present, output present, output is an existing
    directory, url parses as an absolute URI with a host.
    """
    return _require(command_line.url, URL_REQUIRED).flat_map(
        lambda url: _require(command_line.output, OUTPUT_REQUIRED)
        .flat_map(_existing_directory)
        .flat_map(
            lambda output_path: resolve_host(url).map(
                lambda host: InvocationConfig(url=url, output_path=output_path, host=host)
            )
        )
    )


def format_usage() -> str:
    """Description, usage line, one line per option, attribution."""
    width = max(len(option.signature) for option in OPTIONS) + 4
    option_lines = [f"  {option.signature.ljust(width)}{option.help}" for option in OPTIONS]
    return "\n".join(
        [
            DESCRIPTION,
            f"Usage: {PROG} [OPTIONS]",
            "",
            *option_lines,
            "",
            ATTRIBUTION,
        ]
    )


def print_usage() -> None:
    print(format_usage())  # noqa: T201
