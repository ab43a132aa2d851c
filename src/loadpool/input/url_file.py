"""Loading target URLs from a newline-delimited text file."""

from __future__ import annotations

from pathlib import Path

from loadpool._internal.errors import TargetFileError


def load_urls(file_path: str | Path) -> list[str]:
    """Read target URLs from a text file.

    Each non-empty line is one URL. Surrounding whitespace is stripped and
    blank lines are skipped. URLs are not validated here.

    Args:
        file_path: Path to the URL file.

    Returns:
        URLs in file order. Empty if the file has no non-blank lines.

    Raises:
        TargetFileError: If the file does not exist, is not a regular
            file, or cannot be read as UTF-8 text.
    """
    path = Path(file_path)

    if not path.exists():
        msg = f"URL file not found: {path}"
        raise TargetFileError(msg)

    if not path.is_file():
        msg = f"URL file is not a regular file: {path}"
        raise TargetFileError(msg)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read URL file {path}: {exc}"
        raise TargetFileError(msg) from exc

    return [line.strip() for line in text.splitlines() if line.strip()]
