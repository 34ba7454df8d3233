"""CLI console helpers with optional Rich support.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``,
``list`` in a bare environment) keep working without it.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from cv_studio.exceptions import EnvironmentError

# Rich style tags such as [bold red], [/dim] or [/]; a leading backslash
# marks an escaped, literal tag.
_MARKUP_TAG = re.compile(r"(\\?)(\[/?(?:[a-z#][^\[\]]*)?\])")


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
	"""Create a Rich console instance targeting stdout."""
	console_class = _load_rich_console_class()
	return console_class(highlight=False)


def rich_available() -> bool:
	try:
		_load_rich_console_class()
	except EnvironmentError:
		return False
	return True


def escape_markup(text: str) -> str:
	"""Escape user-entered *text* so neither Rich nor the plain fallback
	reads it as markup."""
	if rich_available():
		from rich.markup import escape

		return escape(text)
	return _MARKUP_TAG.sub(lambda m: "\\" + m.group(2), text)


def strip_markup(text: str) -> str:
	"""Drop Rich style tags so *text* reads cleanly on a plain terminal.

	Escaped tags (``\\[dev]``) are kept as literal text.
	"""
	return _MARKUP_TAG.sub(lambda m: m.group(2) if m.group(1) else "", text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stdout print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			plain = [strip_markup(o) if isinstance(o, str) else o for o in objects]
			print(*plain, file=sys.stdout)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()
