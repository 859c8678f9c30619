"""Terminal implementation of the Clipboard port.

Writes an OSC 52 escape sequence, which most terminal emulators (and tmux
with ``set-clipboard on``) turn into a system clipboard write. The sequence
goes to stdout, or to stderr when stdout is piped, and is skipped when
neither is a terminal.
"""

from __future__ import annotations

import base64
import logging
from typing import IO

import click

from storefront.application.order_confirmation import Clipboard

logger = logging.getLogger(__name__)


def _terminal_stream() -> IO | None:
    for name in ("stdout", "stderr"):
        stream = click.get_text_stream(name)
        if stream.isatty():
            return stream
    return None


class TerminalClipboard(Clipboard):

    def copy(self, text: str) -> None:
        stream = _terminal_stream()
        if stream is None:
            logger.warning("No terminal attached; clipboard copy skipped")
            return
        payload = base64.b64encode(text.encode("utf-8")).decode("ascii")
        click.echo(f"\x1b]52;c;{payload}\x07", file=stream, nl=False)
