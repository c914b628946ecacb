"""
Context gathering: turns a file, a directory tree or a PDF into text that is
appended to the user's question.
"""

from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from get_response.core.config import config
from get_response.core.errors import ContextError
from get_response.prompts import context_prompt

SKIPPED_EXTENSIONS = {".log", ".zip", ".tar", ".rar", ".gz", ".7z"}
SKIPPED_DIRECTORIES = {
    ".next",
    "node_modules",
    "dist",
    "build",
    "coverage",
    "logs",
    "__pycache__",
    "tmp",
    "temp",
}


def is_skippable(path: Path, max_size: Optional[int] = None) -> bool:
    """
    Check whether a path should be left out of the context.

    Archives, logs, build/cache directories and files larger than
    ``max_size`` bytes (3 MiB by default) are skipped.
    """
    path = Path(path)
    if path.suffix in SKIPPED_EXTENSIONS or path.name in SKIPPED_DIRECTORIES:
        return True

    limit = config.max_context_file_size if max_size is None else max_size
    try:
        return path.stat().st_size > limit
    except OSError as e:
        raise ContextError(f"Cannot access {path}: {e}") from e


def attach_context(question: str, content: str) -> str:
    """Append gathered context to a question."""
    return context_prompt(question, content)


def read_file_context(path: Path) -> str:
    """
    Read a single text file.

    Raises:
        ContextError: If the file is skippable or cannot be read
    """
    path = Path(path)
    if is_skippable(path):
        raise ContextError(f"Cannot read this file, it is too large: {path}")

    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ContextError(f"Error while reading the file: {e}") from e

    logger.debug(f"Read {len(content)} chars from {path}")
    return content


def read_directory_context(
    path: Path,
    on_skip: Optional[Callable[[Path], None]] = None,
    on_read: Optional[Callable[[Path], None]] = None,
) -> str:
    """
    Read every non-skippable file below a directory.

    Args:
        path: Directory to walk
        on_skip: Called with each skipped path (for user-facing warnings)
        on_read: Called with each file that was read

    Returns:
        Concatenated ``Context from <file>`` sections
    """
    root = Path(path)
    if not root.is_dir():
        raise ContextError(f"Error while reading files from the directory: {root} is not a directory")

    parts = []

    def walk(directory: Path) -> None:
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            raise ContextError(f"Error while reading files from the directory: {e}") from e

        for entry in entries:
            if is_skippable(entry):
                logger.debug(f"Skipping {entry}")
                if on_skip:
                    on_skip(entry)
                continue
            if entry.is_dir():
                walk(entry)
                continue
            try:
                content = entry.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise ContextError(f"Error while reading the file {entry}: {e}") from e
            parts.append(f"\nContext from {entry}:\n\n{content}")
            if on_read:
                on_read(entry)

    walk(root)
    logger.debug(f"Collected {len(parts)} files from {root}")
    return "".join(parts)


def read_pdf_context(path: Path) -> str:
    """
    Extract the text of every page of a PDF.

    Raises:
        ContextError: If the file is not a PDF or cannot be parsed
    """
    path = Path(path)
    if path.suffix.lower() != ".pdf":
        raise ContextError(f"Cannot read this file, it is not a PDF: {path}")

    import pymupdf

    try:
        doc = pymupdf.open(str(path))
    except Exception as e:  # noqa: BLE001 - PyMuPDF raises several unrelated types
        raise ContextError(f"Error while reading the file: {e}") from e

    try:
        pages = [page.get_text("text") for page in doc]
    finally:
        doc.close()

    logger.debug(f"Extracted {len(pages)} pages from {path}")
    return "\n".join(pages)
