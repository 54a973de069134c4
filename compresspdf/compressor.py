"""Compression pipeline for :mod:`compresspdf`.

For every target the pipeline optionally checks whether Ghostscript already
produced the file, rewrites it into a scratch directory and copies the
candidate back over the original only when it is not larger.
"""

from __future__ import annotations

import dataclasses
import hashlib
import logging
from pathlib import Path
from typing import Callable

from rich.console import Console

from . import inspector
from .optimizers import Toolchain, build_ghostscript_command
from .utils import copy_file, file_size, humanize, percent, resolve_path, run_subprocess

_LOGGER = logging.getLogger("compresspdf")


@dataclasses.dataclass(frozen=True)
class CompressionJob:
    """Run-wide options and inputs, fixed for the duration of a run."""

    targets: tuple[Path, ...]
    work_dir: Path
    toolchain: Toolchain
    force: bool = False
    verbose: bool = False
    quiet: bool = False


class Compressor:
    """Applies the skip/compress/compare/replace pipeline to each job target."""

    def __init__(
        self,
        job: CompressionJob,
        console: Console | None = None,
        skip_detector: Callable[[Toolchain, Path], bool] | None = None,
    ) -> None:
        self.job = job
        self.console = console or Console(emoji=False)
        self.skip_detector = skip_detector or inspector.appears_compressed

    def _say(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def _verbose(self, message: str) -> None:
        if self.job.verbose:
            self._say(message)

    def compress_all(self) -> int:
        """Process every target in order and return how many were shrunk.

        The first error aborts the run and propagates to the caller.
        """

        count = 0
        for target in self.job.targets:
            if self.maybe_compress(target):
                count += 1
        if not self.job.quiet:
            noun = "file" if count == 1 else "files"
            self._say(f"Compressed {count} {noun}")
        return count

    def maybe_compress(self, target: Path) -> bool:
        if not self.job.force and self.skip_detector(self.job.toolchain, target):
            self._verbose(f"Skipping {target} as it appears to be already-compressed")
            return False
        return self.compress(target)

    def candidate_path(self, target: Path) -> Path:
        """Return the scratch location for *target*'s candidate.

        The name is a digest of the resolved target path, so targets sharing
        a base name in different directories do not collide and long base
        names cannot push the candidate past the filename length limit.
        """

        digest = hashlib.sha1(str(resolve_path(target)).encode("utf-8")).hexdigest()[:16]
        return self.job.work_dir / f"{digest}.pdf"

    def compress(self, target: Path) -> bool:
        """Rewrite *target* with Ghostscript and keep the result if it is not larger."""

        candidate = self.candidate_path(target)
        command = build_ghostscript_command(self.job.toolchain.ghostscript, target, candidate)
        _LOGGER.info("Running ghostscript on %s", target)
        run_subprocess(command, timeout=self.job.toolchain.timeout)

        old_size = file_size(target, "original")
        new_size = file_size(candidate, "candidate")

        growth = new_size - old_size
        if growth > 0:
            self._verbose(
                f'Compressing "{target}" made it grow from {humanize(old_size)} '
                f"by {humanize(growth)}; skipping."
            )
            return False

        copy_file(candidate, target)
        self._verbose(
            f'Shrank "{target}" to {humanize(new_size)} '
            f"({percent(old_size, new_size)}% of its original size)"
        )
        return True
