"""Append-only log of resolved edit requests."""

from __future__ import annotations

from models.edit import WorksheetEdit


class EditHistory:
    """Records are appended in completion order and never mutated or removed."""

    def __init__(self) -> None:
        self._records: list[WorksheetEdit] = []

    def append(self, record: WorksheetEdit) -> WorksheetEdit:
        self._records.append(record)
        return record

    @property
    def records(self) -> tuple[WorksheetEdit, ...]:
        return tuple(self._records)

    @property
    def latest(self) -> WorksheetEdit | None:
        return self._records[-1] if self._records else None

    def successes(self) -> list[WorksheetEdit]:
        return [record for record in self._records if record.success]

    def failures(self) -> list[WorksheetEdit]:
        return [record for record in self._records if not record.success]

    def for_selection(self, key: str) -> list[WorksheetEdit]:
        """Records made against one selection key."""
        return [record for record in self._records if record.selection_key == key]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(tuple(self._records))
