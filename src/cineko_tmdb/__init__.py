"""cineko TMDB client library."""

from .config import TmdbConfig
from .credentials import CredentialStore
from .exceptions import TmdbError, TmdbErrorCodes
from .executor import HttpRequestExecutor, RequestExecutor
from .file_store import EncryptedFileSecureStore, YamlFileLocalStore
from .images import ImageClass, image_url
from .loader import load
from .logger import new_logger
from .manager import TmdbManager
from .mapper import InMemoryObjectMapper, ObjectMapper
from .memory import InMemoryLocalStore, InMemorySecureStore
from .models import (
    CreditParent,
    CreditRecord,
    CreditType,
    EntityKind,
    EntityRef,
    ImageRecord,
    ImageType,
    MappedList,
)
from .resources import ResourceClient
from .session import SessionManager, SessionState
from .store import LocalStore, SecureStore

__all__ = [
    "CreditParent",
    "CreditRecord",
    "CreditType",
    "CredentialStore",
    "EncryptedFileSecureStore",
    "EntityKind",
    "EntityRef",
    "HttpRequestExecutor",
    "ImageClass",
    "ImageRecord",
    "ImageType",
    "InMemoryLocalStore",
    "InMemoryObjectMapper",
    "InMemorySecureStore",
    "LocalStore",
    "MappedList",
    "ObjectMapper",
    "RequestExecutor",
    "ResourceClient",
    "SecureStore",
    "SessionManager",
    "SessionState",
    "TmdbConfig",
    "TmdbError",
    "TmdbErrorCodes",
    "TmdbManager",
    "YamlFileLocalStore",
    "image_url",
    "load",
    "new_logger",
]
