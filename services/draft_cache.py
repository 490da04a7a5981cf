"""Draft state cache — unsent instruction text, keyed by selection.

One visible draft exists at a time and it always belongs to the active
selection key.  On a selection change the outgoing text is saved under the
previous key and the incoming key's saved text (``""`` if none) becomes
visible.  Entries are created lazily and never evicted; a successful
submission empties an entry but keeps the key.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class DraftStateCache:
    """Per-selection draft buffers for one editing session."""

    def __init__(self) -> None:
        self._saved: dict[str, str] = {}
        self._active_key: str | None = None
        self._visible_text: str = ""

    @property
    def active_key(self) -> str | None:
        return self._active_key

    @property
    def visible_text(self) -> str:
        return self._visible_text

    def type_text(self, text: str) -> None:
        """The user edited the instruction input of the active selection."""
        self._visible_text = text
        if self._active_key is not None:
            self._saved[self._active_key] = text

    def on_selection_change(self, prev_key: str | None, next_key: str | None) -> str:
        """Save the outgoing draft and restore the incoming one.

        Returns the text that is now visible.
        """
        if prev_key == next_key:
            self._active_key = next_key
            return self._visible_text

        if prev_key is not None:
            self._saved[prev_key] = self._visible_text

        self._active_key = next_key
        if next_key is None:
            # Saved entries stay; only the visible buffer is cleared.
            self._visible_text = ""
        else:
            self._visible_text = self._saved.get(next_key, "")

        logger.debug("Draft swap %s -> %s (%d chars restored)", prev_key, next_key, len(self._visible_text))
        return self._visible_text

    def on_submit(self, key: str | None) -> None:
        """Empty the entry for *key*; the visible draft too if *key* is active."""
        if key is None:
            return
        self._saved[key] = ""
        if key == self._active_key:
            self._visible_text = ""

    def saved_text(self, key: str) -> str:
        """Saved draft for *key*, or ``""``."""
        return self._saved.get(key, "")

    def keys(self) -> list[str]:
        """Every key that has ever held a draft, in creation order."""
        return list(self._saved)

    def __contains__(self, key: object) -> bool:
        return key in self._saved
