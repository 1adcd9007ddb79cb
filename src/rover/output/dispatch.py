"""
Dispatcher

Selects the renderer for the configured output format, writes the result to
the two output streams and computes the exit code. stdout only ever receives
the body (or the JSON envelope); everything decorative goes to stderr.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import TextIO

import click
from rich.console import Console
from rich.text import Text

from rover.config import OutputFormat
from rover.domain.errors import RoverError, UnclassifiedError
from rover.domain.results import RoverOutput

from .human import HumanReport, render_human, render_human_error
from .machine import render_machine

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

Outcome = RoverOutput | RoverError


def exit_code_for(outcome: Outcome) -> int:
    """0 for any result (dual-state included), 1 for a failure."""
    return EXIT_FAILURE if isinstance(outcome, RoverError) else EXIT_SUCCESS


class Dispatcher:
    """Render one command outcome per invocation."""

    def __init__(
        self,
        output_format: OutputFormat,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        is_interactive: Callable[[], bool] | None = None,
    ) -> None:
        self.output_format = output_format
        self._stdout = stdout
        self._stderr = stderr
        self._is_interactive = is_interactive

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def is_interactive(self) -> bool:
        if self._is_interactive is not None:
            return self._is_interactive()
        isatty = getattr(self.stdout, "isatty", None)
        return bool(isatty and isatty())

    def run(self, handler: Callable[[], RoverOutput], *, emit_success: bool = True) -> int:
        """
        Run a command handler and render whatever it produced.

        RoverErrors are rendered as classified failures. Any other exception
        becomes an unclassified failure (code null). Click's own exceptions are
        re-raised so usage errors and aborted prompts keep click's handling.
        With ``emit_success`` False only a failure is rendered, which lets a
        command run a preview step without writing a second result.
        """
        outcome: Outcome
        try:
            outcome = handler()
        except RoverError as error:
            outcome = error
        except (click.ClickException, click.Abort):
            raise
        except Exception as exc:
            logger.debug("Unclassified failure from %s", handler, exc_info=True)
            outcome = UnclassifiedError.from_exception(exc)
        if not emit_success and not isinstance(outcome, RoverError):
            return EXIT_SUCCESS
        return self.emit(outcome)

    def emit(self, outcome: Outcome) -> int:
        """Write ``outcome`` to the streams and return the exit code."""
        logger.debug("Emitting %s as %s", type(outcome).__name__, self.output_format)
        if self.output_format == OutputFormat.JSON:
            self._write_body(render_machine(outcome).to_json())
        elif isinstance(outcome, RoverError):
            self._write_error(outcome)
        else:
            self._write_report(render_human(outcome))
        return exit_code_for(outcome)

    def _console(self) -> Console:
        return Console(file=self.stderr, highlight=False, soft_wrap=True)

    def _write_error(self, error: RoverError) -> None:
        console = self._console()
        for line in render_human_error(error):
            console.print(line)
        self.stderr.flush()

    def _write_report(self, report: HumanReport) -> None:
        if self.is_interactive():
            console = self._console()
            if report.descriptor is not None:
                heading = Text(f"{report.descriptor}:", style="bold")
                if report.inline_descriptor:
                    console.print(heading, end=" ")
                else:
                    console.print(heading)
                    console.print()
            for line in report.status_lines:
                console.print(line)
            self.stderr.flush()
        if report.advisory_lines:
            # build errors are reported even when stdout is piped
            console = self._console()
            for line in report.advisory_lines:
                console.print(line)
            self.stderr.flush()
        if report.body:
            self._write_body(report.body)

    def _write_body(self, body: str) -> None:
        click.echo(body, file=self.stdout)
        self.stdout.flush()
