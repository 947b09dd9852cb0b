"""
Docblock annotation: mark strict Flow declarations as generated and owned.

Only a line that reads exactly `* @flow strict` (any indentation, trailing
whitespace allowed) qualifies. The two annotations are inserted right after it
with the same prefix and line ending; every other line is kept as-is.
"""

import re
from typing import List, Optional, Tuple

from .config import RewriteConfig

_LINE = re.compile(r"[^\n]*\n|[^\n]+$")


def _split_lines(text: str) -> List[str]:
    """Split text into lines that keep their line endings ("".join round-trips)."""
    return _LINE.findall(text)


def _annotation_line(annotation: str) -> "re.Pattern[str]":
    return re.compile(
        r"^(?P<prefix>[ \t]*\*[ \t]*)" + re.escape(annotation) + r"[ \t]*$"
    )


def annotate_docblock(
    comment: str, config: RewriteConfig
) -> Optional[Tuple[str, List[int], List[str]]]:
    """
    Insert the generated marker and oncall tag after the strict marker line.

    A marker line already followed by exactly these annotations is left
    alone, so annotating twice changes nothing.

    Args:
        comment: Full comment text, delimiters included.
        config: Engine configuration (markers and oncall tag).

    Returns:
        (new_comment, marker_line_indexes, inserted_lines), or None when the
        comment does not qualify or is already annotated.
    """
    if config.strict_marker not in comment:
        return None

    lines = _split_lines(comment)
    marker = _annotation_line(config.strict_marker)
    output: List[str] = []
    marker_indexes: List[int] = []
    inserted: List[str] = []

    for index, line in enumerate(lines):
        output.append(line)
        body = line.rstrip("\r\n")
        eol = line[len(body):]
        match = marker.match(body)
        # the closing "*/" always follows on a later line, so a marker line has an eol
        if not match or not eol:
            continue
        annotations = [f"{match.group('prefix')}{annotation}" for annotation in config.inserted_annotations]
        following = [text.rstrip() for text in lines[index + 1:index + 1 + len(annotations)]]
        if following == annotations:
            continue
        marker_indexes.append(index)
        for new_line in annotations:
            output.append(new_line + eol)
            inserted.append(new_line)

    if not marker_indexes:
        return None
    return "".join(output), marker_indexes, inserted
