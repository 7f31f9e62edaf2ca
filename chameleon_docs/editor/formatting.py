"""Markdown toolbar actions and AI splicing for the editor.

Every function is pure: it takes the content and a selection
``[start, end)`` and returns the new content with the selection to restore.
"""

from dataclasses import dataclass
from typing import Tuple

INLINE_MARKERS = {
    "bold": "**",
    "italic": "*",
    "code": "`",
}

LINE_PREFIXES = {
    "h1": "# ",
    "h2": "## ",
    "list": "- ",
    "quote": "> ",
}

# Headings apply to the line holding the cursor; list and quote to every
# selected line.
_SINGLE_LINE_ACTIONS = frozenset({"h1", "h2"})

FORMAT_ACTIONS = tuple(INLINE_MARKERS) + tuple(LINE_PREFIXES)


class UnknownFormatAction(ValueError):
    pass


@dataclass(frozen=True)
class EditResult:
    content: str
    selection_start: int
    selection_end: int


def _clamp_selection(content: str, start: int, end: int) -> Tuple[int, int]:
    start = max(0, min(start, len(content)))
    end = max(0, min(end, len(content)))
    return (start, end) if start <= end else (end, start)


def _line_start(content: str, pos: int) -> int:
    return content.rfind("\n", 0, pos) + 1


def _line_end(content: str, pos: int) -> int:
    idx = content.find("\n", pos)
    return len(content) if idx == -1 else idx


def apply_format(content: str, start: int, end: int, action: str) -> EditResult:
    """Apply toolbar *action* to the selection.

    Raises UnknownFormatAction for anything not in ``FORMAT_ACTIONS``.

    >>> apply_format("make this bold", 10, 14, "bold").content
    'make this **bold**'
    """
    start, end = _clamp_selection(content, start, end)

    if action in INLINE_MARKERS:
        marker = INLINE_MARKERS[action]
        wrapped = f"{marker}{content[start:end]}{marker}"
        new_content = content[:start] + wrapped + content[end:]
        return EditResult(new_content, start + len(marker), end + len(marker))

    if action in LINE_PREFIXES:
        prefix = LINE_PREFIXES[action]
        block_start = _line_start(content, start)
        if action in _SINGLE_LINE_ACTIONS:
            block_end = _line_end(content, start)
        else:
            # A selection ending right after a newline does not include the next line.
            last = end - 1 if end > start and content[end - 1] == "\n" else end
            block_end = _line_end(content, last)

        lines = content[block_start:block_end].split("\n")
        prefixed = "\n".join(prefix + line for line in lines)
        new_content = content[:block_start] + prefixed + content[block_end:]
        added = len(prefixed) - (block_end - block_start)
        return EditResult(new_content, start + len(prefix), end + added)

    raise UnknownFormatAction(f"Unknown format action: {action}")


def splice_rewrite(content: str, start: int, end: int, replacement: str) -> EditResult:
    """Insert an AI rewrite.

    Replaces the selection, or the whole content when nothing is selected.
    The cursor lands at the end of the inserted text.
    """
    start, end = _clamp_selection(content, start, end)
    if start == end:
        return EditResult(replacement, len(replacement), len(replacement))
    new_content = content[:start] + replacement + content[end:]
    cursor = start + len(replacement)
    return EditResult(new_content, cursor, cursor)


def rewrite_source(content: str, start: int, end: int) -> str:
    """Text that an AI rewrite should operate on: the selection, else everything."""
    start, end = _clamp_selection(content, start, end)
    return content[start:end] if start != end else content
