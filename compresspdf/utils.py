"""Utility helpers for :mod:`compresspdf`."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import MutableMapping, Sequence

from .exceptions import ExternalToolError, FilesystemError

_LOGGER = logging.getLogger("compresspdf")

_SIZE_SUFFIXES = ("b", "K", "M", "G")


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """Attach a stderr handler to the ``compresspdf`` logger and set *level*."""

    logger = logging.getLogger("compresspdf")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(level)
    return logger


def resolve_path(path: os.PathLike[str] | str) -> Path:
    """Resolve *path* into an absolute :class:`~pathlib.Path`."""

    resolved = Path(path).expanduser().resolve()
    _LOGGER.debug("Resolved path '%s' to '%s'", path, resolved)
    return resolved


def which(executables: Sequence[str]) -> str | None:
    """Return the first executable from *executables* found on ``PATH``."""

    for candidate in executables:
        found = shutil.which(candidate)
        if found:
            _LOGGER.debug("Detected external tool: %s -> %s", candidate, found)
            return found
    return None


def run_subprocess(
    command: Sequence[str],
    *,
    env: MutableMapping[str, str] | None = None,
    timeout: float | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run *command* capturing stdout and stderr as one combined stream.

    Parameters
    ----------
    command:
        Command and arguments to execute.
    env:
        Optional environment overrides.
    timeout:
        Seconds to wait before giving up; ``None`` waits forever.
    check:
        Whether to raise :class:`ExternalToolError` on non-zero exit.
    """

    command = [str(part) for part in command]
    _LOGGER.debug("Executing command: %s", " ".join(command))
    try:
        completed = subprocess.run(
            command,
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=timeout,
            check=False,
            text=True,
            errors="replace",
        )
    except subprocess.TimeoutExpired as exc:
        output = exc.output or ""
        if isinstance(output, bytes):
            output = output.decode(errors="replace")
        raise ExternalToolError(command, output, reason=f"timed out after {timeout} seconds") from exc
    except OSError as exc:
        raise ExternalToolError(command, reason=f"could not be started ({exc})") from exc

    _LOGGER.debug(
        "Command finished with exit code %s\noutput: %s",
        completed.returncode,
        completed.stdout,
    )
    if check and completed.returncode != 0:
        raise ExternalToolError(command, completed.stdout or "", completed.returncode)
    return completed


def file_size(path: Path, label: str) -> int:
    """Return the size of *path*, wrapping stat failures as :class:`FilesystemError`."""

    try:
        return path.stat().st_size
    except OSError as exc:
        raise FilesystemError(f"stat {label}", path, str(exc)) from exc


def copy_file(source: Path, destination: Path) -> None:
    """Overwrite *destination* with the bytes of *source* and sync it to disk."""

    try:
        src = source.open("rb")
    except OSError as exc:
        raise FilesystemError("open", source, str(exc)) from exc
    with src:
        try:
            dst = destination.open("wb")
        except OSError as exc:
            raise FilesystemError("create", destination, str(exc)) from exc
        with dst:
            try:
                shutil.copyfileobj(src, dst)
            except OSError as exc:
                raise FilesystemError("copy to", destination, str(exc)) from exc
            try:
                dst.flush()
                os.fsync(dst.fileno())
            except OSError as exc:
                raise FilesystemError("flush", destination, str(exc)) from exc
    _LOGGER.debug("Copied %s over %s", source, destination)


def humanize(num_bytes: int) -> str:
    """Format *num_bytes* with one decimal and a single-letter 1024-based suffix.

    >>> humanize(1536)
    '1.5K'
    """

    value = float(num_bytes)
    for suffix in _SIZE_SUFFIXES[:-1]:
        if value < 1024:
            return f"{value:.1f}{suffix}"
        value /= 1024
    return f"{value:.1f}{_SIZE_SUFFIXES[-1]}"


def percent(old_size: int, new_size: int) -> str:
    """Return ``new_size`` as a percentage of ``old_size``.

    Precision narrows as the ratio grows: two decimals below 1%, one below
    10%, none otherwise. A zero-byte original yields ``"100"`` when the new
    size is also zero and ``"inf"`` otherwise.
    """

    if old_size <= 0:
        return "100" if new_size == 0 else "inf"
    ratio = 100.0 * new_size / old_size
    if ratio < 1:
        return f"{ratio:.2f}"
    if ratio < 10:
        return f"{ratio:.1f}"
    return f"{ratio:.0f}"
