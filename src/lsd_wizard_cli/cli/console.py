"""CLI console helpers with optional Rich support.

Two output channels:

* stderr — status lines, errors and hints, styled by Rich when it is
  installed and printed plain otherwise.
* stdout — command results via :func:`emit`, always unstyled so they
  can be piped.

Error messages and hints routinely echo user input (command names,
addresses) and contract revert strings.  They are rendered as Rich
``Text`` objects, never parsed as markup, so brackets in them print
literally.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``)
remain functional even when it is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from lsd_wizard_cli.exceptions import EnvironmentError, LsdWizardError


def _load_rich() -> tuple[type[Any], type[Any]]:
	"""Return ``(Console, Text)`` from Rich or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
		from rich.text import Text
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console, Text


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class, _ = _load_rich()
	return console_class(stderr=True)


class _StderrConsole:
	"""Status and error rendering on stderr, with a plain-text fallback."""

	def print(self, *objects: object) -> None:
		"""Render trusted renderables (tables, static markup) as-is."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def status(self, text: str, *, style: str | None = None) -> None:
		"""Print one line of *text* literally, optionally styled."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(text, file=sys.stderr)
			return
		rich_console.print(text, style=style, markup=False, highlight=False)

	def labelled(self, label: str, text: str, *, style: str) -> None:
		"""Print ``label text`` with only the label styled."""
		try:
			console_class, text_class = _load_rich()
		except EnvironmentError:
			print(f"{label} {text}", file=sys.stderr)
			return
		console_class(stderr=True).print(
			text_class.assemble((label, style), " ", text),
			highlight=False,
		)

	def error(self, exc: LsdWizardError) -> None:
		"""Render ``Error: <message>`` and, when present, ``Hint: <hint>``."""
		self.labelled("Error:", str(exc), style="bold red")
		if exc.hint:
			self.labelled("Hint:", exc.hint, style="yellow")


console = _StderrConsole()


def emit(line: str) -> None:
	"""Write one result line to stdout, unstyled."""
	print(line, file=sys.stdout)
