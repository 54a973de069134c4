"""Custom exception types for :mod:`compresspdf`.

Every error raised while processing a run is fatal; the CLI catches
:class:`CompressPDFError` at the top level, prints the message and exits 1.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Sequence


def _format_command(command: Sequence[str] | None) -> str:
    if not command:
        return "<unknown command>"
    return shlex.join(str(part) for part in command)


class CompressPDFError(Exception):
    """Base exception for all compresspdf errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown compresspdf error occurred."


class UsageError(CompressPDFError):
    """Raised when the command line does not name any PDF to compress."""

    @property
    def default_message(self) -> str:
        return "You must specify the name of at least one pdf to compress"


class ToolNotFoundError(CompressPDFError):
    """Raised when a required external executable is not on ``PATH``."""

    def __init__(self, tool: str, candidates: Sequence[str] = ()) -> None:
        self.tool = tool
        self.candidates = tuple(candidates) or (tool,)
        names = ", ".join(self.candidates)
        super().__init__(f"Required tool {tool!r} was not found in PATH (looked for: {names})")


class ExternalToolError(CompressPDFError):
    """Raised when an external tool cannot be run or exits non-zero."""

    def __init__(
        self,
        command: Sequence[str],
        output: str = "",
        returncode: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.command = list(command)
        self.output = output
        self.returncode = returncode
        detail = reason or f"exited with status {returncode}"
        super().__init__(
            f"Running {_format_command(self.command)} {detail}; output:\n{output}"
        )


class MalformedOutputError(CompressPDFError):
    """Raised when metadata output cannot be split into ``key: value`` records."""

    def __init__(self, line: str, output: str, command: Sequence[str] | None = None) -> None:
        self.line = line
        self.output = output
        self.command = list(command) if command else None
        super().__init__(
            f"Unexpected line of output {line!r} in\n{output}\nwhen running "
            f"{_format_command(self.command)}"
        )


class FilesystemError(CompressPDFError):
    """Raised when a stat, open, copy or flush on a target or candidate fails."""

    def __init__(self, operation: str, path: str | Path, reason: str = "") -> None:
        self.operation = operation
        self.path = Path(path)
        message = f"Failed to {operation} {str(self.path)!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
