"""
compresspdf - shrink PDF files in place with Ghostscript.

Each target is rewritten at the Ghostscript ``screen`` preset into a scratch
directory, and the result replaces the original only when it is not larger.
Files whose ``Producer`` already names Ghostscript are skipped unless forced.

Quick Start:
    >>> from pathlib import Path
    >>> from compresspdf import CompressionJob, Compressor, detect_toolchain
    >>> job = CompressionJob(targets=(Path('a.pdf'),), work_dir=Path('/tmp/w'),
    ...                      toolchain=detect_toolchain(), verbose=True)
    >>> Compressor(job).compress_all()

For CLI usage, use the 'compresspdf' command after installation.
"""

from compresspdf.compressor import CompressionJob, Compressor
from compresspdf.exceptions import (
    CompressPDFError,
    ExternalToolError,
    FilesystemError,
    MalformedOutputError,
    ToolNotFoundError,
    UsageError,
)
from compresspdf.inspector import appears_compressed, parse_metadata, read_metadata
from compresspdf.optimizers import Toolchain, build_ghostscript_command, detect_toolchain
from compresspdf.utils import humanize, percent

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    "CompressionJob",
    "Compressor",
    "Toolchain",
    "detect_toolchain",
    "build_ghostscript_command",
    "appears_compressed",
    "parse_metadata",
    "read_metadata",
    "humanize",
    "percent",
    "CompressPDFError",
    "UsageError",
    "ToolNotFoundError",
    "ExternalToolError",
    "MalformedOutputError",
    "FilesystemError",
    "__version__",
]
