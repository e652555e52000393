# tests/test_latex_compiler.py
import pytest

from justyou.services.latex_compiler import compile_latex, sanitize_filename

SIMPLE_TEX = r"""
\documentclass{article}
\begin{document}
Jane Doe
\end{document}
"""


class FakeProc:
    def __init__(self, returncode=0, stdout=b"OK"):
        self.returncode = returncode
        self.stdout = stdout


def _fake_pdf(monkeypatch, data=b"%PDF-1.4 fakepdf"):
    # the PDF lands in a temp dir inside compile_latex; intercept the read
    import pathlib

    real_read_bytes = pathlib.Path.read_bytes

    def fake_read_bytes(self):
        if str(self).endswith(".pdf"):
            return data
        return real_read_bytes(self)

    monkeypatch.setattr("pathlib.Path.read_bytes", fake_read_bytes)


def test_sanitize_filename():
    assert sanitize_filename("../../etc/passwd") == "etcpasswd"
    assert sanitize_filename("jane doe-cv_v2") == "janedoe-cv_v2"
    assert sanitize_filename("") == "resume"


@pytest.mark.parametrize("latexmk_available", [True, False])
def test_compile_success(monkeypatch, latexmk_available):
    monkeypatch.setattr(
        "shutil.which",
        lambda name: "/usr/bin/latexmk" if latexmk_available and name == "latexmk" else ("/usr/bin/pdflatex" if name == "pdflatex" else None),
    )
    calls = []

    def fake_run(cmd, cwd, stdout, stderr, timeout, check):
        calls.append(cmd)
        return FakeProc()

    monkeypatch.setattr("subprocess.run", fake_run)
    _fake_pdf(monkeypatch)

    success, pdf_bytes, log = compile_latex(SIMPLE_TEX, jobname="jane", timeout=5)
    assert success
    assert pdf_bytes.startswith(b"%PDF")
    assert "OK" in log
    assert calls[0][-1] == "jane.tex"
    # user text is compiled without shell escape
    assert "-shell-escape" not in calls[0]


def test_latexmk_failure_falls_back_to_pdflatex(monkeypatch):
    calls = []

    def fake_run(cmd, cwd, stdout, stderr, timeout, check):
        calls.append(cmd)
        if len(calls) == 1:
            return FakeProc(returncode=12, stdout=b"latexmk failed")
        return FakeProc(stdout=b"pdflatex ok")

    monkeypatch.setattr("subprocess.run", fake_run)
    _fake_pdf(monkeypatch)

    success, _, log = compile_latex(SIMPLE_TEX, timeout=5)
    assert success
    assert len(calls) == 2
    assert "PDFLATEX OUTPUT" in log


def test_compile_without_pdf_output(monkeypatch):
    monkeypatch.setattr("subprocess.run", lambda *a, **kw: FakeProc(returncode=1, stdout=b"! Undefined control sequence."))
    success, pdf, log = compile_latex(SIMPLE_TEX, timeout=5)
    assert not success
    assert pdf == b""
    assert "Undefined control sequence" in log


def test_compile_timeout(monkeypatch):
    import subprocess

    def fake_run(*args, **kwargs):
        raise subprocess.TimeoutExpired(cmd="latexmk", timeout=1)

    monkeypatch.setattr("subprocess.run", fake_run)
    success, pdf, log = compile_latex(SIMPLE_TEX, timeout=1)
    assert not success
    assert "Timeout" in log


def test_oversized_pdf_is_rejected(monkeypatch):
    from justyou.core.config import settings

    monkeypatch.setattr(settings, "LATEX_MAX_PDF_BYTES", 10)
    monkeypatch.setattr("subprocess.run", lambda *a, **kw: FakeProc())
    _fake_pdf(monkeypatch, data=b"%PDF-" + b"x" * 100)
    success, pdf, log = compile_latex(SIMPLE_TEX, timeout=5)
    assert not success
    assert "too large" in log
