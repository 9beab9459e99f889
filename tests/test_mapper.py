"""InMemoryObjectMapper のユニットテスト"""

import pytest
from cineko_tmdb.mapper import InMemoryObjectMapper
from cineko_tmdb.models import CreditParent, CreditType, EntityKind, EntityRef, ImageType


def test_find_or_create_then_find(mapper: InMemoryObjectMapper) -> None:
    """同じ ID は同じエンティティに更新されること。"""
    first = mapper.find_or_create(EntityKind.MOVIE, {"id": 550, "title": "Fight Club"})
    second = mapper.find_or_create(EntityKind.MOVIE, {"id": 550, "vote_average": 8.4})
    assert first == second == EntityRef(EntityKind.MOVIE, 550)
    entity = mapper.get(first)
    assert entity.fields["title"] == "Fight Club"
    assert entity.fields["vote_average"] == 8.4


@pytest.mark.parametrize("fields", [{}, {"id": None}, {"id": "550"}, {"id": True}])
def test_find_or_create_rejects_bad_id(mapper: InMemoryObjectMapper, fields: dict) -> None:
    assert mapper.find_or_create(EntityKind.PERSON, fields) is None


def test_same_id_different_kinds(mapper: InMemoryObjectMapper) -> None:
    movie = mapper.find_or_create(EntityKind.MOVIE, {"id": 1})
    show = mapper.find_or_create(EntityKind.TV_SHOW, {"id": 1})
    assert movie != show


def test_update_kind_mismatch(mapper: InMemoryObjectMapper) -> None:
    ref = mapper.find_or_create(EntityKind.MOVIE, {"id": 1})
    with pytest.raises(ValueError):
        mapper.update(EntityKind.TV_SHOW, ref, {"name": "x"})


def test_image_dedup(mapper: InMemoryObjectMapper) -> None:
    """同じ file_path・種別・対象の画像は 1 件にまとまること。"""
    movie = mapper.find_or_create(EntityKind.MOVIE, {"id": 1})
    a = mapper.find_or_create_image({"file_path": "/a.jpg"}, ImageType.MOVIE_POSTER, movie)
    b = mapper.find_or_create_image(
        {"file_path": "/a.jpg", "width": 500}, ImageType.MOVIE_POSTER, movie
    )
    assert a is b
    assert a.fields["width"] == 500
    assert len(mapper.images_for(movie)) == 1


def test_credit_requires_credit_id(mapper: InMemoryObjectMapper) -> None:
    movie = mapper.find_or_create(EntityKind.MOVIE, {"id": 1})
    assert (
        mapper.find_or_create_credit({"id": 2}, CreditType.CAST, CreditParent.MOVIE, movie)
        is None
    )
