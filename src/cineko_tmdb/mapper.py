"""Object mapper: find-or-create / update of local entities from TMDB JSON."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .models import (
    CreditParent,
    CreditRecord,
    CreditType,
    Entity,
    EntityKind,
    EntityRef,
    ImageRecord,
    ImageType,
)

_COUNTERPART_KIND: dict[CreditParent, EntityKind] = {
    CreditParent.MOVIE: EntityKind.MOVIE,
    CreditParent.TV_SHOW: EntityKind.TV_SHOW,
}


class ObjectMapper(ABC):
    """Local object store interface consumed by the resource client.

    Every ``find_or_create*`` returns None when the payload cannot be mapped.
    """

    @abstractmethod
    def find_or_create(self, kind: EntityKind, fields: dict[str, Any]) -> EntityRef | None: ...

    @abstractmethod
    def update(self, kind: EntityKind, ref: EntityRef, fields: dict[str, Any]) -> None: ...

    @abstractmethod
    def find_or_create_image(
        self, fields: dict[str, Any], image_type: ImageType, subject: EntityRef
    ) -> ImageRecord | None: ...

    @abstractmethod
    def find_or_create_credit(
        self,
        fields: dict[str, Any],
        credit_type: CreditType,
        parent_kind: CreditParent,
        subject: EntityRef,
    ) -> CreditRecord | None: ...


def _external_id(fields: dict[str, Any]) -> int | None:
    value = fields.get("id")
    # bool is an int subclass; TMDB never sends one as an id
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


class InMemoryObjectMapper(ObjectMapper):
    """Dictionary-backed object mapper keyed by TMDB ids."""

    def __init__(self) -> None:
        self._entities: dict[EntityRef, Entity] = {}
        self._images: dict[tuple[str, ImageType, EntityRef], ImageRecord] = {}
        self._credits: dict[tuple[str, CreditType, CreditParent, EntityRef], CreditRecord] = {}

    def find_or_create(self, kind: EntityKind, fields: dict[str, Any]) -> EntityRef | None:
        entity_id = _external_id(fields)
        if entity_id is None:
            return None
        ref = EntityRef(kind=kind, id=entity_id)
        entity = self._entities.setdefault(ref, Entity(ref=ref))
        entity.fields.update(fields)
        return ref

    def update(self, kind: EntityKind, ref: EntityRef, fields: dict[str, Any]) -> None:
        if ref.kind != kind:
            raise ValueError(f"Entity kind mismatch: {ref.kind} != {kind}")
        entity = self._entities.setdefault(ref, Entity(ref=ref))
        entity.fields.update({k: v for k, v in fields.items() if k != "id"})

    def find_or_create_image(
        self, fields: dict[str, Any], image_type: ImageType, subject: EntityRef
    ) -> ImageRecord | None:
        file_path = fields.get("file_path")
        if not isinstance(file_path, str) or not file_path:
            return None
        key = (file_path, image_type, subject)
        record = self._images.get(key)
        if record is None:
            record = ImageRecord(file_path=file_path, image_type=image_type, subject=subject)
            self._images[key] = record
        record.fields.update(fields)
        return record

    def find_or_create_credit(
        self,
        fields: dict[str, Any],
        credit_type: CreditType,
        parent_kind: CreditParent,
        subject: EntityRef,
    ) -> CreditRecord | None:
        credit_id = fields.get("credit_id")
        if not isinstance(credit_id, str) or not credit_id:
            return None
        if subject.kind == EntityKind.PERSON:
            counterpart_kind = _COUNTERPART_KIND.get(parent_kind)
        else:
            counterpart_kind = EntityKind.PERSON
        counterpart = None
        if counterpart_kind is not None:
            counterpart = self.find_or_create(counterpart_kind, _counterpart_fields(fields))
        key = (credit_id, credit_type, parent_kind, subject)
        record = self._credits.get(key)
        if record is None:
            record = CreditRecord(
                credit_id=credit_id,
                credit_type=credit_type,
                parent_kind=parent_kind,
                subject=subject,
            )
            self._credits[key] = record
        record.counterpart = counterpart
        record.fields.update(fields)
        return record

    def get(self, ref: EntityRef) -> Entity | None:
        return self._entities.get(ref)

    def images_for(self, subject: EntityRef) -> list[ImageRecord]:
        return [r for r in self._images.values() if r.subject == subject]

    def credits_for(self, subject: EntityRef) -> list[CreditRecord]:
        return [r for r in self._credits.values() if r.subject == subject]


# Credit payloads mix edge fields (character, job, order) with the
# counterpart's own fields; only the latter belong on the entity.
_EDGE_FIELDS = frozenset(
    {"credit_id", "character", "job", "department", "order", "cast_id", "media_type"}
)


def _counterpart_fields(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in _EDGE_FIELDS}
