"""Markdown → DOCX conversion through the pandoc CLI."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from config import BriefConfig
from errors import ConversionError

logger = logging.getLogger(__name__)


def markdown_to_docx(markdown: str, pandoc_bin: Optional[str] = None, stem: str = "Brief") -> bytes:
    """Convert Markdown text to DOCX bytes. Temp files never outlive the call."""
    pandoc = shutil.which(pandoc_bin or BriefConfig.PANDOC_BIN)
    if not pandoc:
        raise ConversionError(f"pandoc executable not found ({pandoc_bin or BriefConfig.PANDOC_BIN})")
    try:
        with tempfile.TemporaryDirectory() as tmpdir:
            md_path = Path(tmpdir) / f"{stem}.md"
            docx_path = Path(tmpdir) / f"{stem}.docx"
            md_path.write_text(markdown, encoding="utf-8")
            subprocess.run(
                [pandoc, str(md_path), "-o", str(docx_path)],
                check=True,
                capture_output=True,
                timeout=BriefConfig.PANDOC_TIMEOUT,
            )
            if not docx_path.exists():
                raise ConversionError("pandoc finished without writing a DOCX file")
            data = docx_path.read_bytes()
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or b"").decode("utf-8", errors="replace").strip()
        raise ConversionError(f"pandoc failed with exit code {exc.returncode}: {stderr}") from exc
    except subprocess.TimeoutExpired as exc:
        raise ConversionError(f"pandoc timed out after {exc.timeout}s") from exc
    except OSError as exc:
        raise ConversionError(f"pandoc could not run: {exc}") from exc
    logger.debug("Converted %d chars of Markdown into %d bytes of DOCX", len(markdown), len(data))
    return data


class PandocConverter:
    """Callable wrapper so the intake handler can take any converter."""

    def __init__(self, pandoc_bin: Optional[str] = None):
        self.pandoc_bin = pandoc_bin

    def __call__(self, markdown: str, stem: str = "Brief") -> bytes:
        return markdown_to_docx(markdown, pandoc_bin=self.pandoc_bin, stem=stem)
