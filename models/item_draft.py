"""Builder for clothing items that are still being reviewed by the user.

Analysis output and form edits arrive piecemeal. The builder accumulates them
and reports either an :class:`IncompleteDraft` listing what is missing or a
:class:`CompleteDraft` wrapping a validated :class:`AnalyzedClothingItem`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Union

from logic.errors import ValidationError
from models.wardrobe_item import DRAFT_FIELDS, AnalyzedClothingItem


@dataclass(frozen=True)
class IncompleteDraft:
    missing: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CompleteDraft:
    item: AnalyzedClothingItem


DraftState = Union[IncompleteDraft, CompleteDraft]


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


class ItemDraftBuilder:
    """Accumulates item fields until every required one is present."""

    # Tags may legitimately be empty once the user clears them.
    _OPTIONAL_WHEN_EMPTY = {"tags"}

    def __init__(self, **initial: Any) -> None:
        self._fields: Dict[str, Any] = {}
        self.update(**initial)

    @classmethod
    def from_analysis(cls, analyzed: AnalyzedClothingItem) -> "ItemDraftBuilder":
        return cls(**asdict(analyzed))

    def update(self, **values: Any) -> "ItemDraftBuilder":
        for key, value in values.items():
            if key in DRAFT_FIELDS:
                self._fields[key] = value
        return self

    @property
    def fields(self) -> Dict[str, Any]:
        return dict(self._fields)

    def missing_fields(self) -> List[str]:
        missing = []
        for name in DRAFT_FIELDS:
            value = self._fields.get(name)
            if name in self._OPTIONAL_WHEN_EMPTY and value is not None:
                continue
            if not _is_present(value):
                missing.append(name)
        return missing

    def state(self) -> DraftState:
        """Return the typed draft state; field values are validated when complete."""

        missing = self.missing_fields()
        if missing:
            return IncompleteDraft(missing=missing)
        try:
            item = AnalyzedClothingItem(**{name: self._fields[name] for name in DRAFT_FIELDS})
        except (TypeError, ValueError) as exc:
            raise ValidationError(str(exc)) from exc
        return CompleteDraft(item=item)

    def build(self) -> AnalyzedClothingItem:
        state = self.state()
        if isinstance(state, IncompleteDraft):
            raise ValidationError(missing=state.missing)
        return state.item


__all__ = ["CompleteDraft", "DraftState", "IncompleteDraft", "ItemDraftBuilder"]
