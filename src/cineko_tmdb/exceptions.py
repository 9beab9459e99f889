"""cineko_tmdb ライブラリの例外型定義"""

from __future__ import annotations


class TmdbError(Exception):
    """cineko_tmdb ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class TmdbErrorCodes:
    """TmdbError のエラーコード定数。"""

    MISSING_API_KEY: str = "MISSING_API_KEY"
    NO_REQUEST_TOKEN: str = "NO_REQUEST_TOKEN"
    TRANSPORT_ERROR: str = "TRANSPORT_ERROR"
    STORE_ERROR: str = "STORE_ERROR"
    MAPPING_ERROR: str = "MAPPING_ERROR"
    CONFIG_READ: str = "CONFIG_READ_ERROR"
    CONFIG_PARSE: str = "CONFIG_PARSE_ERROR"
    CONFIG_VALIDATION: str = "CONFIG_VALIDATION_ERROR"


def missing_api_key() -> TmdbError:
    return TmdbError(
        code=TmdbErrorCodes.MISSING_API_KEY,
        message="TMDB API key is not configured",
    )
