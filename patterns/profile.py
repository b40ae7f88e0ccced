"""Entity profiles — the per-collection configuration shared by the
mutation pipeline and dependency-checked deletion.

A profile names the repository, the record type, the validation
configuration, how form fields map onto record fields, which reference
lists a form needs and which query finds dependents. The pipelines are
written once against this shape; each vertical declares one profile per
collection.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional

from core.database import CatalogStore
from patterns.aggregation import Lookup
from patterns.repository import BaseRepository
from patterns.rules_engine import FieldKind, FieldRule


@dataclass(frozen=True)
class DependentQuery:
    """Finds the records that reference a target."""

    key: str
    repository: type[BaseRepository]
    query: Callable[[Any, str], Awaitable[list]]


@dataclass(frozen=True)
class EntityProfile:
    """Everything the generic pipelines need to know about one collection."""

    name: str
    repository: type[BaseRepository]
    record: type
    kinds: Mapping[str, FieldKind]
    create_rules: tuple[FieldRule, ...]
    collection_url: str
    update_rules: Optional[tuple[FieldRule, ...]] = None
    # form field name -> record field name, where they differ
    field_map: Mapping[str, str] = field(default_factory=dict)
    # applied when the sanitized value is empty
    defaults: Mapping[str, Any] = field(default_factory=dict)
    natural_key: Optional[str] = None
    form_lookups: Optional[Callable[[CatalogStore], Mapping[str, Lookup]]] = None
    dependents: Optional[DependentQuery] = None

    def rules_for(self, updating: bool) -> tuple[FieldRule, ...]:
        if updating and self.update_rules is not None:
            return self.update_rules
        return self.create_rules

    def build(self, cleaned: Mapping[str, Any], item_id: str | None = None):
        """Construct a candidate record from sanitized fields."""
        values: dict[str, Any] = {}
        for form_name, value in cleaned.items():
            if not value and form_name in self.defaults:
                value = self.defaults[form_name]
            values[self.field_map.get(form_name, form_name)] = value
        return self.record(id=item_id, **values)
