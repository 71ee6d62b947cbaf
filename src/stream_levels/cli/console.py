"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from stream_levels.exceptions import EnvironmentError

LOG_FORMAT: str = "%(name)s: %(message)s"


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def configure_logging(verbose: bool = False) -> logging.Handler:
	"""Route ``stream_levels`` log records to stderr.

	Uses :class:`rich.logging.RichHandler` when Rich is installed and a
	plain stream handler otherwise.  Calling it again replaces the
	handler installed by the previous call.
	"""
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		handler: logging.Handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter(f"%(levelname)s {LOG_FORMAT}"))
	else:
		handler = RichHandler(
			console=get_rich_console(),
			show_time=False,
			show_path=False,
		)
		handler.setFormatter(logging.Formatter(LOG_FORMAT))

	package_logger = logging.getLogger("stream_levels")
	for existing in list(package_logger.handlers):
		package_logger.removeHandler(existing)
	package_logger.addHandler(handler)
	package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
	package_logger.propagate = False
	return handler
