"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Tracker initialization, a bridge from
Click's synchronous callbacks to the async services, and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, TypeVar

import click

from wimt.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from wimt.config.settings import WimtSettings
    from wimt.infrastructure.tracker import Tracker
    from wimt.services.result import ServiceResult

T = TypeVar("T")


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The tracker is lazily initialized on first use so ``--help`` and
    ``--version`` never touch the database.
    """

    def __init__(self, settings: WimtSettings) -> None:
        self.settings = settings
        self._tracker: Tracker | None = None

        from wimt.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def tracker(self) -> Tracker:
        """The tracker instance (created lazily on first access)."""
        if self._tracker is None:
            from wimt.infrastructure.tracker import Tracker

            self._tracker = Tracker(self.settings)
            self._tracker.init_plugins()
        return self._tracker

    @staticmethod
    def run(coro: Coroutine[Any, Any, T]) -> T:
        """Drive an async service call to completion."""
        return asyncio.run(coro)

    def close(self) -> None:
        if self._tracker is not None:
            self._tracker.close()
            self._tracker = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
