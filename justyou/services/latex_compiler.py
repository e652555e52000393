# justyou/services/latex_compiler.py
import tempfile
import pathlib
import shutil
import subprocess
from typing import Tuple, Optional
import logging

from justyou.core.config import settings

logger = logging.getLogger(__name__)


def sanitize_filename(name: str) -> str:
    # allow alnum, underscore, dash, dot
    return "".join(c for c in name if c.isalnum() or c in ("_", "-", ".")).strip(".") or "resume"


def _run(cmd, cwd: pathlib.Path, timeout: int) -> subprocess.CompletedProcess:
    return subprocess.run(
        cmd,
        cwd=str(cwd),
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        timeout=timeout,
        check=False,
    )


def compile_latex(tex_source: str, jobname: str = "resume", timeout: Optional[int] = None) -> Tuple[bool, bytes, str]:
    """
    Compile tex_source to PDF with latexmk, falling back to pdflatex.
    Returns (success, pdf_bytes_or_empty, log_text) and never raises.
    Blocking: run it in a worker thread from async code.
    """
    timeout = timeout or settings.LATEX_COMPILE_TIMEOUT
    tmpdir_path = pathlib.Path(tempfile.mkdtemp(prefix="justyou_latex_"))
    main_tex_name = f"{sanitize_filename(jobname)}.tex"
    try:
        (tmpdir_path / main_tex_name).write_text(tex_source, encoding="utf-8")

        # -shell-escape stays off: user text ends up in the source
        latexmk = shutil.which("latexmk") or "latexmk"
        pdflatex = shutil.which("pdflatex") or "pdflatex"
        cmd = [latexmk, "-pdf", "-interaction=nonstopmode", "-halt-on-error", main_tex_name]
        logger.info("Starting LaTeX compile: %s", cmd)
        log = ""
        try:
            proc = _run(cmd, tmpdir_path, timeout)
            log = proc.stdout.decode("utf-8", errors="replace")
            returncode = proc.returncode
        except FileNotFoundError:
            returncode = 127
            log = "latexmk not available\n"
        if returncode != 0:
            proc2 = _run([pdflatex, "-interaction=nonstopmode", "-halt-on-error", main_tex_name], tmpdir_path, timeout)
            log += "\n\nPDFLATEX OUTPUT:\n" + proc2.stdout.decode("utf-8", errors="replace")
            returncode = proc2.returncode

        pdf_path = tmpdir_path / main_tex_name.replace(".tex", ".pdf")
        try:
            pdf_bytes = pdf_path.read_bytes()
        except FileNotFoundError:
            logger.warning("LaTeX compile failed (returncode=%s) - PDF missing", returncode)
            return False, b"", log
        if len(pdf_bytes) > settings.LATEX_MAX_PDF_BYTES:
            logger.warning("Compiled PDF exceeds max size (%s bytes)", len(pdf_bytes))
            return False, b"", log + f"\n\nCompiled PDF too large: {len(pdf_bytes)} bytes"
        return True, pdf_bytes, log

    except subprocess.TimeoutExpired as te:
        logger.error("LaTeX compile timed out after %ss", timeout)
        return False, b"", f"Timeout after {timeout}s\n{te}"
    except FileNotFoundError:
        logger.error("LaTeX binary not found: latexmk/pdflatex")
        return False, b"", "Error: latexmk/pdflatex not available in runtime"
    except Exception as exc:
        logger.exception("Unexpected error during LaTeX compile")
        return False, b"", f"Error: {exc}"
    finally:
        shutil.rmtree(tmpdir_path, ignore_errors=True)
