"""Reader-side display of a reimagined page.

The original content is never replaced: the rewrite is stored alongside it
and the reader switches between the original, the rewrite and a line diff.
Rewrites are remembered per project and page in a caller-supplied mapping.
"""

from typing import Dict, MutableMapping, Optional

from ..client.reimagine_stream import GENERIC_ERROR, ProgressCallback, ReimagineClient, ReimagineStreamError

VIEW_ORIGINAL = "original"
VIEW_REIMAGINED = "reimagined"
VIEW_DIFF = "diff"
VIEW_MODES = (VIEW_ORIGINAL, VIEW_REIMAGINED, VIEW_DIFF)

CHANGED_PREFIX = "> **🟢 Changed:** "

# Level id -> label shown in the reader's picker.
REIMAGINE_LEVELS: Dict[str, str] = {
    "technical": "Technical",
    "standard": "Standard",
    "simplified": "Simplified",
    "beginner": "Beginner",
    "noob": "Like I'm 5",
}


def line_diff(original: str, rewritten: str) -> str:
    """Rewrite with every line that differs from the original at the same
    position marked as changed."""
    original_lines = original.split("\n")
    marked = []
    for i, line in enumerate(rewritten.split("\n")):
        if i >= len(original_lines) or line != original_lines[i]:
            marked.append(f"{CHANGED_PREFIX}{line}")
        else:
            marked.append(line)
    return "\n".join(marked)


def storage_key(project_slug: str, page_slug: str) -> str:
    return f"reimagined-{project_slug}-{page_slug}"


class ReimagineView:
    def __init__(
        self,
        project_slug: str,
        page_slug: str,
        original: str,
        store: Optional[MutableMapping[str, str]] = None,
    ):
        self.project_slug = project_slug
        self.page_slug = page_slug
        self.original = original
        self._store = store if store is not None else {}
        self.level = "standard"
        self.mode = VIEW_ORIGINAL
        self.reimagined: Optional[str] = self._store.get(storage_key(project_slug, page_slug))
        self.is_reimagining = False
        self.last_error: Optional[str] = None

    @property
    def has_rewrite(self) -> bool:
        return self.reimagined is not None

    def set_rewrite(self, text: str) -> None:
        """Keep *text* as this page's rewrite and show it."""
        self.reimagined = text
        self._store[storage_key(self.project_slug, self.page_slug)] = text
        self.mode = VIEW_REIMAGINED

    def reimagine(
        self,
        client: ReimagineClient,
        level: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> bool:
        """Rewrite the original at *level* and switch to it.

        On failure the view is unchanged and ``last_error`` is set.
        """
        if self.is_reimagining:
            return False
        level = level or self.level
        self.is_reimagining = True
        self.last_error = None
        try:
            text = client.reimagine(self.original, simplification_level=level, on_progress=on_progress)
        except ReimagineStreamError:
            self.last_error = GENERIC_ERROR
            return False
        finally:
            self.is_reimagining = False
        self.level = level
        self.set_rewrite(text)
        return True

    def set_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {mode}")
        self.mode = mode

    def toggle_original(self) -> str:
        """Flip between the original and the rewrite (when there is one)."""
        if self.mode == VIEW_ORIGINAL and self.has_rewrite:
            self.mode = VIEW_REIMAGINED
        else:
            self.mode = VIEW_ORIGINAL
        return self.mode

    @property
    def display_content(self) -> str:
        if self.mode == VIEW_DIFF:
            return line_diff(self.original, self.reimagined) if self.has_rewrite else self.original
        if self.mode == VIEW_REIMAGINED and self.has_rewrite:
            return self.reimagined
        return self.original
