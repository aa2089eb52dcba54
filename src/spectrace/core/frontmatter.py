"""
spectrace.core.frontmatter - Metadata header parsing.

Parses the restricted header block at the top of a specification file::

    ---
    type: requirement
    id: REQ-001
    status: draft
    related:
      - DESIGN-001
    ---

This is not a YAML parser. Only single-level ``key: value`` lines and the
block-form ``related`` list are understood; anything else in the header is
ignored.
"""

from __future__ import annotations

import re
from pathlib import Path

from spectrace.core.models import Artifact

HEADER_MARKER = "---"
COMMENT_PREFIX = "#"
SCALAR_KEYS = ("type", "id", "status")
LIST_KEY = "related"

# Indented "- VALUE" line inside the related block
LIST_ITEM_PATTERN = re.compile(r"^\s+-\s+")
# Related identifiers: DESIGN-001, REQ-ABC, ...
RELATED_ID_PATTERN = re.compile(r"-\s+[\"']?([A-Z]+-[A-Z0-9]+)")


def strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def extract_header_lines(content: str) -> list[str] | None:
    """Return the lines between the opening and closing markers.

    Returns None when the content does not open with a marker line (no
    header). Raises ValueError when the header is opened but never closed.
    """
    if not content.startswith(HEADER_MARKER):
        return None

    lines = content.splitlines()
    if lines[0].rstrip() != HEADER_MARKER:
        return None

    for index in range(1, len(lines)):
        if lines[index].strip() == HEADER_MARKER:
            return lines[1:index]

    raise ValueError("Header not closed")


def parse_header(content: str, file_path: Path | str | None = None) -> Artifact | None:
    """Parse a header from raw file content.

    Args:
        content: Full text of the artifact file (LF or CRLF line endings)
        file_path: Origin of the content, kept on the record for diagnostics

    Returns:
        An Artifact (kind unset) when a header is present, or None when the
        content has no header. An unclosed header yields an Artifact with
        an empty id, which loaders discard.
    """
    source_path = Path(file_path) if file_path is not None else None

    try:
        header_lines = extract_header_lines(content)
    except ValueError:
        return Artifact(source_path=source_path)

    if header_lines is None:
        return None

    artifact = Artifact(source_path=source_path)
    in_related = False

    for raw_line in header_lines:
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue

        if in_related and LIST_ITEM_PATTERN.match(raw_line):
            match = RELATED_ID_PATTERN.match(line)
            if match:
                artifact.related.append(match.group(1))
            continue
        in_related = False

        key, sep, value = line.partition(":")
        if not sep:
            # Lenient: lines without a separator are skipped
            continue

        key = key.strip()
        value = strip_quotes(value.strip())

        if key == LIST_KEY:
            in_related = value == ""
        elif key in SCALAR_KEYS:
            setattr(artifact, key, value)

    return artifact


def parse_header_file(file_path: Path) -> Artifact | None:
    """Read ``file_path`` and parse its header.

    Unreadable or non-UTF-8 files are treated like files without a header.
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return parse_header(content, file_path)
