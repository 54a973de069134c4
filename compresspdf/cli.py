"""
Command-line interface for compresspdf.
"""

import logging
import shutil
import sys
import tempfile
from pathlib import Path

import click
from rich.console import Console

from compresspdf.compressor import CompressionJob, Compressor
from compresspdf.exceptions import CompressPDFError, UsageError
from compresspdf.optimizers import detect_toolchain
from compresspdf.utils import configure_logging

console = Console(emoji=False)
_LOGGER = logging.getLogger("compresspdf")


class CompressCommand(click.Command):
    """Command whose usage errors exit with status 1 like every other failure."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.command(
    name="compresspdf",
    cls=CompressCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument('pdf_files', nargs=-1, type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    '--force', '-f',
    is_flag=True,
    help='Attempts compression even if the file may have already been compressed',
)
@click.option(
    '--quiet', '-q',
    is_flag=True,
    help='No output unless there is an error',
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Extra output',
)
@click.option(
    '--timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Give up on an external tool after this many seconds',
)
@click.option(
    '--keep-workdir',
    is_flag=True,
    help='Leave the scratch directory with candidate files on disk',
)
@click.option(
    '--debug',
    is_flag=True,
    help='Log external commands and paths to stderr',
)
def cli(pdf_files, force, quiet, verbose, timeout, keep_workdir, debug):
    """
    Compresses one or more pdf files in place, if they don't appear to have
    been processed already. Requires that gs and pdfinfo are in the PATH.

    Examples:

        compresspdf report.pdf

        compresspdf -v --force scans/*.pdf
    """
    configure_logging(logging.DEBUG if debug else logging.WARNING)
    try:
        run(pdf_files, force=force, quiet=quiet, verbose=verbose,
            timeout=timeout, keep_workdir=keep_workdir)
    except CompressPDFError as e:
        console.print(str(e), markup=False, highlight=False, emoji=False, soft_wrap=True)
        sys.exit(1)


def run(pdf_files, force=False, quiet=False, verbose=False, timeout=None, keep_workdir=False):
    """Build the job for *pdf_files*, compress them and return the count shrunk."""
    if not pdf_files:
        raise UsageError()

    toolchain = detect_toolchain(timeout=timeout)

    work_dir = Path(tempfile.mkdtemp(prefix="compresspdf-"))
    try:
        job = CompressionJob(
            targets=tuple(Path(p) for p in pdf_files),
            work_dir=work_dir,
            toolchain=toolchain,
            force=force,
            verbose=verbose,
            quiet=quiet,
        )
        return Compressor(job, console=console).compress_all()
    finally:
        if keep_workdir:
            _LOGGER.debug("Keeping scratch directory %s", work_dir)
            if verbose:
                console.print(f"Kept scratch directory {work_dir}", markup=False, highlight=False, emoji=False, soft_wrap=True)
        else:
            shutil.rmtree(work_dir, ignore_errors=True)


if __name__ == '__main__':
    cli()
