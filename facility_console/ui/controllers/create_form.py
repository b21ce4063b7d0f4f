from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import time
from typing import Any

from pydantic import BaseModel
from PySide6.QtCore import QObject, Signal

from facility_console.application.dto.query_dto import Option
from facility_console.application.errors import ValidationError
from facility_console.application.resources import ResourceConfig
from facility_console.config import NAME_LENGTH_WARNING


def is_filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, frozenset)):
        return bool(value)
    return True


class CreateFormModel(QObject):
    """Draft values of a create (or edit) form plus the flags derived from them."""

    changed = Signal()

    def __init__(
        self,
        config: ResourceConfig,
        name_limit: int = NAME_LENGTH_WARNING,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._name_limit = name_limit
        self._empty = config.empty_draft()
        self._draft = self._empty
        self._selections: dict[str, list[Option]] = {}

    @property
    def config(self) -> ResourceConfig:
        return self._config

    @property
    def draft(self) -> BaseModel:
        return self._draft

    def set_field(self, name: str, value: Any) -> None:
        if name not in type(self._draft).model_fields:
            raise KeyError(f"{self._config.kind} draft has no field {name!r}")
        self._draft = self._draft.model_copy(update={name: value})
        self.changed.emit()

    def set_name(self, text: str) -> None:
        self.set_field("name", text)

    def set_time(self, name: str, value: time | None) -> None:
        self.set_field(name, value)

    def select(self, name: str, options: Sequence[Option]) -> None:
        source = self._config.references.get(name)
        if source is not None and source.multi:
            selection: list[Option] = []
            seen: set[Any] = set()
            for option in options:
                if option.id not in seen:
                    seen.add(option.id)
                    selection.append(option)
            value: Any = [option.id for option in selection]
        else:
            selection = list(options[:1])
            value = selection[0].id if selection else None
        self._selections[name] = selection
        self.set_field(name, value)

    def selections(self, name: str) -> list[Option]:
        return list(self._selections.get(name, []))

    @property
    def name_length(self) -> int:
        return len(getattr(self._draft, "name", "") or "")

    @property
    def name_warning(self) -> str | None:
        # advisory only: a long name never blocks submission
        count = self.name_length
        if count <= self._name_limit:
            return None
        return (
            f"You have used {count} characters. Please limit your "
            f"{self._config.singular} names to {self._name_limit} characters."
        )

    def missing_fields(self) -> list[str]:
        return [name for name in self._config.required_fields if not is_filled(getattr(self._draft, name))]

    def validate_create(self) -> bool:
        return not self.missing_fields()

    def validate_clear_all(self) -> bool:
        return self._draft.model_dump() != self._empty.model_dump()

    def clear(self) -> None:
        self._draft = self._empty
        self._selections = {}
        self.changed.emit()

    def load(self, draft: BaseModel, selections: Mapping[str, Sequence[Option]] | None = None) -> None:
        if not isinstance(draft, type(self._empty)):
            raise TypeError(f"expected {type(self._empty).__name__}, got {type(draft).__name__}")
        self._draft = draft
        self._selections = {name: list(options) for name, options in (selections or {}).items()}
        self.changed.emit()

    def build_payload(self) -> dict[str, Any]:
        missing = self.missing_fields()
        if missing:
            raise ValidationError(f"Required fields are missing: {', '.join(missing)}")
        return self._config.payload_builder(self._draft)
