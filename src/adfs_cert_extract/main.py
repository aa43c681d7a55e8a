"""
Application entry point — wires dependencies and runs the pipeline once.

Composition root: loads settings, configures logging, parses the command line,
creates the concrete adapters and hands them to the pipeline. It is also the
single place where a failure is turned into console output and an exit status.

This is the ONLY place where concrete adapter classes are instantiated.
Everything else depends on Protocol interfaces.
"""

from __future__ import annotations

import logging
import sys
from functools import partial
from typing import Callable, Sequence, TypeAlias

import structlog
from railway import ErrorCode, FailureDescription
from railway.result import Result

from adfs_cert_extract import __version__
from adfs_cert_extract.adapters.certificate_codec import X509CertificateDecoder
from adfs_cert_extract.adapters.certificate_writer import FileCertificateWriter
from adfs_cert_extract.adapters.http_client import HttpMetadataFetcher
from adfs_cert_extract.adapters.metadata_parser import XmlMetadataParser
from adfs_cert_extract.cli import parse_arguments, print_usage, validate_arguments
from adfs_cert_extract.config import AppSettings
from adfs_cert_extract.domain.models import CommandLine, InvocationConfig
from adfs_cert_extract.pipeline import run_pipeline

EXIT_OK = 0
EXIT_FAILURE = 1


def configure_structlog(log_level: str = "WARNING") -> None:
    """
    Configure structlog for human-readable console logging on stderr.

    stdout is reserved for the messages meant for the operator.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.WARNING)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


_Adapters: TypeAlias = tuple[
    HttpMetadataFetcher,
    XmlMetadataParser,
    X509CertificateDecoder,
    FileCertificateWriter,
]


def _create_adapters(settings: AppSettings) -> _Adapters:
    """Instantiate the four concrete adapters from application settings."""
    fetcher = HttpMetadataFetcher(timeout=settings.http_timeout_seconds)
    parser = XmlMetadataParser()
    decoder = X509CertificateDecoder()
    writer = FileCertificateWriter()
    return fetcher, parser, decoder, writer


def _report_failure(error: FailureDescription) -> int:
    """Map a failure to console output; every failure exits non-zero."""
    log = structlog.get_logger()
    log.debug("app.failed", code=error.code.value, trace=error.full_stack_trace())

    if error.code is ErrorCode.VALIDATION_ERROR:
        detail = f": {error.detail}" if error.detail else ""
        print(f"Error: {error.message}{detail}")  # noqa: T201
        print()  # noqa: T201
        print_usage()
        return EXIT_FAILURE

    print(f"ERROR: {error.message}")  # noqa: T201
    if error.detail:
        print(f"Msg: {error.detail}")  # noqa: T201
    return EXIT_FAILURE


def _report_success(config: InvocationConfig, written: int) -> int:
    if written:
        print(f"Signing certificate written to {config.certificate_path}")  # noqa: T201
    else:
        print("No signing certificate found in the federation metadata.")  # noqa: T201
    return EXIT_OK


def _extract(
    command_line: CommandLine,
    pipeline_fn: Callable[[InvocationConfig], Result[int]],
) -> int:
    """Validate, run the pipeline and report; one exit status out."""
    return (
        validate_arguments(command_line)
        .flat_map(lambda config: pipeline_fn(config).map(lambda written: (config, written)))
        .either(
            on_success=lambda outcome: _report_success(*outcome),
            on_failure=_report_failure,
        )
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line, run the extraction once and return the exit status."""
    try:
        settings = AppSettings()
    except Exception as e:
        print(f"FATAL: Configuration error: {e}", file=sys.stderr)  # noqa: T201
        return EXIT_FAILURE

    configure_structlog(settings.log_level)
    log = structlog.get_logger()
    log.info("app.starting", version=__version__, log_level=settings.log_level)

    parsed = parse_arguments(sys.argv[1:] if argv is None else argv)
    if parsed.is_success() and parsed.value().show_help:
        print_usage()
        return EXIT_OK

    fetcher, parser, decoder, writer = _create_adapters(settings)
    pipeline_fn = partial(
        run_pipeline,
        fetcher=fetcher,
        parser=parser,
        decoder=decoder,
        writer=writer,
    )

    return parsed.either(
        on_success=lambda command_line: _extract(command_line, pipeline_fn),
        on_failure=_report_failure,
    )


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
