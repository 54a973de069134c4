"""Producer-based detection of PDFs that Ghostscript already rewrote."""

from __future__ import annotations

import logging
import os
from typing import Sequence

from .exceptions import MalformedOutputError
from .optimizers import Toolchain
from .utils import run_subprocess

_LOGGER = logging.getLogger("compresspdf")

PRODUCER_KEY = "Producer"
PRODUCER_SIGNATURE = "Ghostscript"


def parse_records(output: str, command: Sequence[str] | None = None) -> list[tuple[str, str]]:
    """Split ``pdfinfo`` output into ``(key, value)`` records.

    Records are separated by newlines only and a trailing carriage return is
    dropped. Only the first colon on a line separates key from value, and both
    sides are trimmed. Blank lines are ignored; any other line without a colon
    raises :class:`MalformedOutputError`.
    """

    records: list[tuple[str, str]] = []
    for line in output.split("\n"):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        key, sep, value = line.partition(":")
        if not sep:
            raise MalformedOutputError(line, output, command)
        records.append((key.strip(), value.strip()))
    return records


def _as_mapping(records: list[tuple[str, str]]) -> dict[str, str]:
    metadata: dict[str, str] = {}
    for key, value in records:
        metadata.setdefault(key, value)
    return metadata


def parse_metadata(output: str, command: Sequence[str] | None = None) -> dict[str, str]:
    """Like :func:`parse_records` but as a mapping; the first repeated key wins."""

    return _as_mapping(parse_records(output, command))


def _run_pdfinfo(toolchain: Toolchain, path: str | os.PathLike[str]) -> list[tuple[str, str]]:
    command = [toolchain.pdfinfo, str(path)]
    completed = run_subprocess(command, timeout=toolchain.timeout)
    return parse_records(completed.stdout or "", command)


def read_metadata(toolchain: Toolchain, path: str | os.PathLike[str]) -> dict[str, str]:
    """Run ``pdfinfo`` on *path* and return its parsed metadata."""

    return _as_mapping(_run_pdfinfo(toolchain, path))


def appears_compressed(toolchain: Toolchain, path: str | os.PathLike[str]) -> bool:
    """Return ``True`` when a ``Producer`` record names Ghostscript."""

    for key, value in _run_pdfinfo(toolchain, path):
        if key == PRODUCER_KEY and PRODUCER_SIGNATURE in value:
            _LOGGER.debug("Producer of %s is %r", path, value)
            return True
    return False
