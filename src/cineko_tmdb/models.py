"""TMDB クライアントのデータモデル"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class EntityKind(StrEnum):
    """ローカルオブジェクトグラフのエンティティ種別。"""

    MOVIE = "Movie"
    TV_SHOW = "TVShow"
    PERSON = "Person"


class ImageType(StrEnum):
    """画像レコードの種別（対象エンティティ種別 × 画像クラス）。"""

    MOVIE_BACKDROP = "MovieBackdrop"
    MOVIE_POSTER = "MoviePoster"
    TV_SHOW_BACKDROP = "TVShowBackdrop"
    TV_SHOW_POSTER = "TVShowPoster"


class CreditType(StrEnum):
    """クレジット種別。"""

    CAST = "cast"
    CREW = "crew"
    GUEST_STAR = "guest_star"


class CreditParent(StrEnum):
    """クレジットの親エンティティ種別。"""

    JOB = "Job"
    MOVIE = "Movie"
    PERSON = "Person"
    TV_EPISODE = "TVEpisode"
    TV_SEASON = "TVSeason"
    TV_SHOW = "TVShow"


@dataclass(frozen=True)
class EntityRef:
    """オブジェクトストア内の 1 エンティティへの参照。"""

    kind: EntityKind
    id: int


@dataclass
class Entity:
    """InMemoryObjectMapper が保持するエンティティ。"""

    ref: EntityRef
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> int:
        return self.ref.id


@dataclass
class ImageRecord:
    """画像レコード。"""

    file_path: str
    image_type: ImageType
    subject: EntityRef
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class CreditRecord:
    """クレジットレコード（人物とメディアを結ぶエッジ）。

    parent_kind はクレジットが属するメディアの種別。subject は取得対象の
    エンティティ、counterpart はエッジの反対側（作品クレジットなら人物、
    人物の combined credits なら作品）。
    """

    credit_id: str
    credit_type: CreditType
    parent_kind: CreditParent
    subject: EntityRef
    counterpart: EntityRef | None = None
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class MappedList:
    """一覧エンドポイントのマッピング結果。"""

    ids: list[int] = field(default_factory=list)
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.ids)
