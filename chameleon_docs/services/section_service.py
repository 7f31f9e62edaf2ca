"""Section grouping and ordering.

Sections are not stored as rows: they are the distinct ``section`` labels of
a project's pages. Pages with a blank label belong to "Uncategorized", which
is always shown first and can never be dragged. Everything here is pure so
the editor board and the API share one implementation.
"""

from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

UNCATEGORIZED = "Uncategorized"

PageT = TypeVar("PageT")


def section_label(section: Optional[str]) -> str:
    label = (section or "").strip()
    return label or UNCATEGORIZED


def persistable_order(order: Iterable[str]) -> List[str]:
    """Order as stored on the project: no Uncategorized, no blanks, no duplicates."""
    seen = set()
    result = []
    for name in order:
        label = (name or "").strip()
        if not label or label == UNCATEGORIZED or label in seen:
            continue
        seen.add(label)
        result.append(label)
    return result


def ordered_section_names(labels: Iterable[str], section_order: Sequence[str]) -> List[str]:
    """Display order for the named sections in *labels*.

    Sections named in *section_order* come first, in that order; the rest
    follow in order of first appearance.
    """
    present: List[str] = []
    for label in labels:
        if label != UNCATEGORIZED and label not in present:
            present.append(label)

    ordered = [name for name in persistable_order(section_order) if name in present]
    ordered.extend(name for name in present if name not in ordered)
    return ordered


def build_sections(
    pages: Sequence[PageT],
    section_order: Sequence[str],
) -> List[Tuple[str, List[PageT]]]:
    """Group *pages* (already in page order) into ``(name, pages)`` pairs.

    Uncategorized comes first when it has pages; empty sections are omitted.
    """
    groups = {}
    for page in pages:
        groups.setdefault(section_label(getattr(page, "section", "")), []).append(page)

    result = []
    if UNCATEGORIZED in groups:
        result.append((UNCATEGORIZED, groups[UNCATEGORIZED]))
    for name in ordered_section_names(groups.keys(), section_order):
        result.append((name, groups[name]))
    return result


def move_section(order: Sequence[str], active: str, over: str) -> List[str]:
    """Move *active* to the index currently held by *over*.

    Returns a new list; the input is unchanged. Unknown names, a drop onto
    itself, or any move involving Uncategorized leave the order as it is.

    >>> move_section(["A", "B", "C"], "A", "B")
    ['B', 'A', 'C']
    """
    result = list(order)
    if active == over or UNCATEGORIZED in (active, over):
        return result
    if active not in result or over not in result:
        return result
    old_index = result.index(active)
    new_index = result.index(over)
    result.insert(new_index, result.pop(old_index))
    return result
