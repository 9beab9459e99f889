"""TMDB v3 API のエンドポイント定義"""

from __future__ import annotations

API_URL = "https://api.themoviedb.org/3"
SIGNUP_URL = "https://www.themoviedb.org/account/signup"
AUTHENTICATE_URL = "https://www.themoviedb.org/authenticate"
IMAGE_URL = "https://image.tmdb.org/t/p"

API_KEY_PARAM = "api_key"
REQUEST_TOKEN_KEY = "request_token"
SESSION_ID_KEY = "session_id"

ID_PLACEHOLDER = "{id}"

TOKEN_NEW = "/authentication/token/new"
SESSION_NEW = "/authentication/session/new"

MOVIE_NOW_PLAYING = "/movie/now_playing"
MOVIE_DETAILS = "/movie/{id}"
MOVIE_IMAGES = "/movie/{id}/images"
MOVIE_CREDITS = "/movie/{id}/credits"

TV_ON_THE_AIR = "/tv/on_the_air"
TV_AIRING_TODAY = "/tv/airing_today"
TV_DETAILS = "/tv/{id}"
TV_IMAGES = "/tv/{id}/images"
TV_CREDITS = "/tv/{id}/credits"

PERSON_POPULAR = "/person/popular"
PERSON_COMBINED_CREDITS = "/person/{id}/combined_credits"


def resolve_path(template: str, resource_id: int | None = None) -> str:
    """パステンプレートの {id} を 1 度だけ置換する。

    Raises:
        ValueError: プレースホルダーと resource_id の有無が一致しない場合
    """
    count = template.count(ID_PLACEHOLDER)
    if resource_id is None:
        if count:
            raise ValueError(f"Path template requires an id: {template}")
        return template
    if count != 1:
        raise ValueError(
            f"Path template must contain exactly one {ID_PLACEHOLDER}: {template}"
        )
    return template.replace(ID_PLACEHOLDER, str(resource_id), 1)
