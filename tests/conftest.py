from __future__ import annotations

import io
from pathlib import Path
from types import SimpleNamespace
from typing import Callable
import sys

import pytest
from pypdf import PdfReader, PdfWriter
from rich.console import Console

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from compresspdf import utils as compress_utils  # noqa: E402
from compresspdf.optimizers import Toolchain  # noqa: E402


class FakeTools:
    """Stands in for ``subprocess.run`` when gs or pdfinfo are invoked.

    ``pdfinfo`` prints the document info dictionary read with pypdf;
    ``gs`` writes a candidate whose size is ``ratio`` times the input.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.ratio = 0.7
        self.pdfinfo_output: str | None = None
        self.pdfinfo_returncode = 0
        self.gs_returncode = 0
        self.gs_output = ""

    @property
    def pdfinfo_calls(self) -> list[list[str]]:
        return [call for call in self.calls if Path(call[0]).name == "pdfinfo"]

    @property
    def gs_calls(self) -> list[list[str]]:
        return [call for call in self.calls if Path(call[0]).name == "gs"]

    def __call__(self, command: list[str], **_: object) -> SimpleNamespace:
        self.calls.append(list(command))
        if Path(command[0]).name == "pdfinfo":
            return self._pdfinfo(Path(command[1]))
        return self._ghostscript(command)

    def _pdfinfo(self, path: Path) -> SimpleNamespace:
        if self.pdfinfo_output is not None:
            output = self.pdfinfo_output
        else:
            reader = PdfReader(str(path))
            lines = [f"{key.lstrip('/')}:  {value}" for key, value in (reader.metadata or {}).items()]
            lines.append(f"Pages:           {len(reader.pages)}")
            output = "\n".join(lines) + "\n"
        return SimpleNamespace(returncode=self.pdfinfo_returncode, stdout=output, stderr=None)

    def _ghostscript(self, command: list[str]) -> SimpleNamespace:
        if self.gs_returncode != 0:
            return SimpleNamespace(returncode=self.gs_returncode, stdout=self.gs_output, stderr=None)
        output = next(arg.split("=", 1)[1] for arg in command if arg.startswith("-sOutputFile="))
        data = Path(command[-1]).read_bytes()
        size = int(len(data) * self.ratio)
        if size <= len(data):
            candidate = data[:size]
        else:
            candidate = data + b"%" * (size - len(data))
        Path(output).write_bytes(candidate)
        return SimpleNamespace(returncode=0, stdout=self.gs_output, stderr=None)


@pytest.fixture()
def fake_tools(monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    tools = FakeTools()
    monkeypatch.setattr(compress_utils.subprocess, "run", tools)
    return tools


@pytest.fixture()
def toolchain() -> Toolchain:
    return Toolchain(ghostscript="/usr/bin/gs", pdfinfo="/usr/bin/pdfinfo")


@pytest.fixture()
def tools_on_path(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    available = {"gs": "/usr/bin/gs", "pdfinfo": "/usr/bin/pdfinfo"}
    monkeypatch.setattr(compress_utils.shutil, "which", lambda cmd: available.get(cmd))
    return available


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str = "sample.pdf", producer: str = "Acrobat", pages: int = 3) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=612, height=792)
        writer.add_metadata({"/Producer": producer, "/Title": "Sample Document"})
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory()


@pytest.fixture()
def console_buffer() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200), buffer
