from __future__ import annotations

from typing import List, Sequence

from .patterns import pattern


def is_comment_line(line: str) -> bool:
    stripped = line.strip()
    if stripped.startswith("//"):
        return True
    # JSX children cannot hold // comments; {/* ... */} is the line form there.
    return stripped.startswith("{/*") and stripped.endswith("*/}")


def split_tags(payload: str) -> List[str]:
    payload = payload.strip()
    if payload.endswith("*/}"):
        payload = payload[: -len("*/}")]
    return [tag.strip() for tag in payload.split(",") if tag.strip()]


def tags_above_line(lines: Sequence[str], index: int) -> List[str]:
    """Tags from the contiguous comment block directly above ``lines[index]``.

    The nearest ``@tags`` marker wins; a non-comment line ends the block.
    """
    marker = pattern("tag_marker")
    for idx in range(index - 1, -1, -1):
        line = lines[idx]
        if not is_comment_line(line):
            break
        match = marker.search(line)
        if match:
            return split_tags(match.group("tags"))
    return []


def extract_tags(content: str, needle: str) -> List[str]:
    offset = content.find(needle) if needle else -1
    if offset == -1:
        return []
    line_index = content.count("\n", 0, offset)
    return tags_above_line(content.split("\n"), line_index)
