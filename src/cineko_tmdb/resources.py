"""TMDB resource client: movies, TV shows and people.

Each call validates the API key, resolves its path template, issues one GET
and feeds the payload to the object mapper. Items that fail to map are
skipped and counted; they never abort the batch.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

import structlog

from . import endpoints
from .credentials import CredentialStore
from .exceptions import TmdbError, TmdbErrorCodes
from .executor import RequestExecutor, api_params
from .mapper import ObjectMapper
from .models import (
    CreditParent,
    CreditRecord,
    CreditType,
    EntityKind,
    EntityRef,
    ImageType,
    MappedList,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_IMAGE_TYPES: dict[EntityKind, tuple[ImageType, ImageType]] = {
    EntityKind.MOVIE: (ImageType.MOVIE_BACKDROP, ImageType.MOVIE_POSTER),
    EntityKind.TV_SHOW: (ImageType.TV_SHOW_BACKDROP, ImageType.TV_SHOW_POSTER),
}

_CREDIT_PARENTS: dict[EntityKind, CreditParent] = {
    EntityKind.MOVIE: CreditParent.MOVIE,
    EntityKind.TV_SHOW: CreditParent.TV_SHOW,
}

_MEDIA_TYPES: dict[str, CreditParent] = {
    "movie": CreditParent.MOVIE,
    "tv": CreditParent.TV_SHOW,
}


def _items(data: Any, key: str) -> list[dict[str, Any]]:
    """Return ``data[key]`` as a list of objects; non-objects become empty dicts."""
    if not isinstance(data, dict):
        return []
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, dict) else {} for item in value]


def _map_each(
    items: Iterable[dict[str, Any]], fn: Callable[[dict[str, Any]], T | None]
) -> tuple[list[T], int]:
    results = [fn(item) for item in items]
    mapped = [r for r in results if r is not None]
    return mapped, len(results) - len(mapped)


class ResourceClient:
    """TMDB resource endpoints backed by an object mapper."""

    def __init__(
        self,
        credentials: CredentialStore,
        executor: RequestExecutor,
        mapper: ObjectMapper,
    ) -> None:
        self._credentials = credentials
        self._executor = executor
        self._mapper = mapper

    async def _fetch(self, template: str, resource_id: int | None = None) -> Any:
        api_key = self._credentials.require_api_key()
        path = endpoints.resolve_path(template, resource_id)
        return await self._executor.get(path, api_params(api_key))

    async def _list(self, template: str, kind: EntityKind) -> MappedList:
        data = await self._fetch(template)
        refs, skipped = _map_each(
            _items(data, "results"),
            lambda item: self._mapper.find_or_create(kind, item),
        )
        if skipped:
            logger.warning("list_items_skipped", path=template, skipped=skipped)
        return MappedList(ids=[ref.id for ref in refs], skipped=skipped)

    async def _details(self, template: str, kind: EntityKind, resource_id: int) -> None:
        data = await self._fetch(template, resource_id)
        if not isinstance(data, dict):
            return
        ref = self._subject(kind, resource_id)
        self._mapper.update(kind, ref, data)

    async def _images(self, template: str, kind: EntityKind, resource_id: int) -> None:
        data = await self._fetch(template, resource_id)
        subject = self._subject(kind, resource_id)
        backdrop_type, poster_type = _IMAGE_TYPES[kind]
        skipped = 0
        for key, image_type in (("backdrops", backdrop_type), ("posters", poster_type)):
            _, missed = _map_each(
                _items(data, key),
                lambda item: self._mapper.find_or_create_image(item, image_type, subject),
            )
            skipped += missed
        if skipped:
            logger.warning("image_items_skipped", path=template, id=resource_id, skipped=skipped)

    async def _credits(self, template: str, kind: EntityKind, resource_id: int) -> None:
        data = await self._fetch(template, resource_id)
        subject = self._subject(kind, resource_id)
        skipped = 0
        for credit_type in (CreditType.CAST, CreditType.CREW):
            _, missed = _map_each(
                _items(data, credit_type.value),
                lambda item: self._map_credit(item, credit_type, subject),
            )
            skipped += missed
        if skipped:
            logger.warning("credit_items_skipped", path=template, id=resource_id, skipped=skipped)

    def _map_credit(
        self, item: dict[str, Any], credit_type: CreditType, subject: EntityRef
    ) -> CreditRecord | None:
        if subject.kind == EntityKind.PERSON:
            parent_kind = _MEDIA_TYPES.get(item.get("media_type", ""))
            if parent_kind is None:
                return None
        else:
            parent_kind = _CREDIT_PARENTS[subject.kind]
        return self._mapper.find_or_create_credit(item, credit_type, parent_kind, subject)

    def _subject(self, kind: EntityKind, resource_id: int) -> EntityRef:
        ref = self._mapper.find_or_create(kind, {"id": resource_id})
        if ref is None:
            raise TmdbError(
                code=TmdbErrorCodes.MAPPING_ERROR,
                message=f"Object mapper rejected {kind} id {resource_id}",
            )
        return ref

    # Movies

    async def movies_now_playing(self) -> MappedList:
        return await self._list(endpoints.MOVIE_NOW_PLAYING, EntityKind.MOVIE)

    async def movie_details(self, movie_id: int) -> None:
        await self._details(endpoints.MOVIE_DETAILS, EntityKind.MOVIE, movie_id)

    async def movie_images(self, movie_id: int) -> None:
        await self._images(endpoints.MOVIE_IMAGES, EntityKind.MOVIE, movie_id)

    async def movie_credits(self, movie_id: int) -> None:
        await self._credits(endpoints.MOVIE_CREDITS, EntityKind.MOVIE, movie_id)

    # TV shows

    async def tv_shows_on_the_air(self) -> MappedList:
        return await self._list(endpoints.TV_ON_THE_AIR, EntityKind.TV_SHOW)

    async def tv_shows_airing_today(self) -> MappedList:
        return await self._list(endpoints.TV_AIRING_TODAY, EntityKind.TV_SHOW)

    async def tv_show_details(self, tv_show_id: int) -> None:
        await self._details(endpoints.TV_DETAILS, EntityKind.TV_SHOW, tv_show_id)

    async def tv_show_images(self, tv_show_id: int) -> None:
        await self._images(endpoints.TV_IMAGES, EntityKind.TV_SHOW, tv_show_id)

    async def tv_show_credits(self, tv_show_id: int) -> None:
        await self._credits(endpoints.TV_CREDITS, EntityKind.TV_SHOW, tv_show_id)

    # People

    async def people_popular(self) -> MappedList:
        return await self._list(endpoints.PERSON_POPULAR, EntityKind.PERSON)

    async def person_combined_credits(self, person_id: int) -> None:
        await self._credits(endpoints.PERSON_COMBINED_CREDITS, EntityKind.PERSON, person_id)
