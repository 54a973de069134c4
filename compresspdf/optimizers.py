"""External tool discovery and the Ghostscript argument template."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence

from .exceptions import ToolNotFoundError
from .utils import which

_LOGGER = logging.getLogger("compresspdf")

DEFAULT_PDF_SETTING = "screen"
COMPATIBILITY_LEVEL = "1.4"


class ToolType(str, Enum):
    """Enumeration of the external programs compresspdf drives."""

    GHOSTSCRIPT = "ghostscript"
    PDFINFO = "pdfinfo"


_TOOL_CANDIDATES: dict[ToolType, Sequence[str]] = {
    ToolType.GHOSTSCRIPT: ("gs", "gswin64c", "gswin32c"),
    ToolType.PDFINFO: ("pdfinfo",),
}


@dataclass(frozen=True)
class Toolchain:
    """Resolved executables for one run, plus the per-invocation timeout."""

    ghostscript: str
    pdfinfo: str
    timeout: float | None = None


def locate_tool(tool: ToolType) -> str:
    """Return the executable for *tool* or raise :class:`ToolNotFoundError`."""

    candidates = _TOOL_CANDIDATES[tool]
    executable = which(candidates)
    if executable is None:
        raise ToolNotFoundError(candidates[0], candidates)
    return executable


def detect_toolchain(timeout: float | None = None) -> Toolchain:
    """Resolve Ghostscript and pdfinfo from ``PATH``, failing fast if either is missing."""

    toolchain = Toolchain(
        ghostscript=locate_tool(ToolType.GHOSTSCRIPT),
        pdfinfo=locate_tool(ToolType.PDFINFO),
        timeout=timeout,
    )
    _LOGGER.debug("Using toolchain %s", toolchain)
    return toolchain


def build_ghostscript_command(
    executable: str,
    source: Path,
    output: Path,
    setting: str = DEFAULT_PDF_SETTING,
) -> list[str]:
    """Construct the Ghostscript command rewriting *source* into *output*."""

    return [
        executable,
        f"-dPDFSETTINGS=/{setting}",
        f"-sOutputFile={output}",
        "-sDEVICE=pdfwrite",
        f"-dCompatibilityLevel={COMPATIBILITY_LEVEL}",
        "-dNOPAUSE",
        "-dQUIET",
        "-dBATCH",
        str(source),
    ]
