import logging
from pathlib import Path
from typing import Optional, Tuple

from app import config
from app.errors import SyntaxRushError
from app.snippets import language_for_path

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 256 * 1024


def upload_filter() -> str:
    """File dialog filter matching the accepted source extensions."""
    patterns = " ".join(f"*{ext}" for ext in config.UPLOAD_EXTENSIONS)
    return f"Source files ({patterns})"


def normalize_text(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if text.endswith("\n\n"):
        text = text.rstrip("\n") + "\n"
    return text


def read_source_file(path) -> Tuple[str, Optional[str]]:
    """Read an uploaded source file. Returns (text, language or None)."""
    p = Path(path)
    language = language_for_path(p)
    if language is None:
        logger.info("Uploaded file %s has no known language", p.name)
    size = p.stat().st_size
    if size > MAX_UPLOAD_BYTES:
        raise SyntaxRushError(f"{p.name} is too large ({size} bytes)")
    text = p.read_text(encoding="utf-8", errors="ignore")
    return normalize_text(text), language
