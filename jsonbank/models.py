"""
Shared data models for the JsonBank SDK.

Contains the configuration dataclasses, request inputs, and the typed
results decoded from server responses.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from jsonbank.errors import DEFAULT_ERROR_CODE, JsbError

DEFAULT_HOST = "https://api.jsonbank.io"

# Username of the service's own account
JSONBANK = "jsonbank"

PUBLIC = "public"
PRIVATE = "private"


# --- Configuration ---


@dataclass(frozen=True)
class Keys:
    """Public/private API key pair. Either may be missing."""

    public: Optional[str] = None
    private: Optional[str] = None

    def has_key(self, kind: str) -> bool:
        return bool(self._value(kind))

    def get_key(self, kind: str) -> str:
        """Return the key of the given kind, or an empty string if unset."""
        return self._value(kind) or ""

    def _value(self, kind: str) -> Optional[str]:
        if kind == PUBLIC:
            return self.public
        if kind == PRIVATE:
            return self.private
        raise ValueError(f"Unknown key kind: {kind!r}")


@dataclass
class InitConfig:
    """Minimal config needed to build a client. Missing host means DEFAULT_HOST."""

    host: Optional[str] = None
    keys: Optional[Keys] = None


@dataclass
class Config:
    host: str
    keys: Optional[Keys] = None


@dataclass(frozen=True)
class Endpoints:
    v1: str
    public: str


# --- Decoding helpers ---


def _invalid_field(name: str) -> JsbError:
    return JsbError(
        DEFAULT_ERROR_CODE,
        f"Invalid response: missing or invalid field '{name}'",
    )


def _expect_object(data: Any, name: str = "response") -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise _invalid_field(name)
    return data


def _required(data: Dict[str, Any], name: str, kind: type = str) -> Any:
    value = data.get(name)
    # bool is an int subclass; don't let true/false pass as a number
    if value is None or not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise _invalid_field(name)
    return value


def _optional(data: Dict[str, Any], name: str, kind: type = str) -> Any:
    if data.get(name) is None:
        return None
    return _required(data, name, kind)


# --- Auth ---


@dataclass(frozen=True)
class AuthenticatedKey:
    title: str
    projects: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Result of a successful authenticate call.

    Frozen so the cached instance can be handed to callers as a snapshot.
    """

    authenticated: bool
    username: str
    api_key: AuthenticatedKey

    @classmethod
    def from_dict(cls, data: Any) -> "AuthenticatedIdentity":
        data = _expect_object(data)
        key = _expect_object(data.get("apiKey"), "apiKey")
        projects = _required(key, "projects", list)
        if not all(isinstance(p, str) for p in projects):
            raise _invalid_field("projects")
        return cls(
            authenticated=_required(data, "authenticated", bool),
            username=_required(data, "username"),
            api_key=AuthenticatedKey(
                title=_required(key, "title"),
                projects=tuple(projects),
            ),
        )


# --- Documents ---


@dataclass
class ContentSize:
    number: int
    string: str


@dataclass
class DocumentMeta:
    """Metadata of a stored document."""

    id: str
    project: str
    path: str
    updated_at: str
    created_at: str
    name: Optional[str] = None
    folder_id: Optional[str] = None
    content_size: Optional[ContentSize] = None

    @classmethod
    def from_dict(cls, data: Any) -> "DocumentMeta":
        data = _expect_object(data)
        content_size = None
        if data.get("contentSize") is not None:
            size = _expect_object(data["contentSize"], "contentSize")
            number = _required(size, "number", int)
            if number < 0:
                raise _invalid_field("number")
            content_size = ContentSize(number=number, string=_required(size, "string"))

        return cls(
            id=_required(data, "id"),
            project=_required(data, "project"),
            path=_required(data, "path"),
            updated_at=_required(data, "updatedAt"),
            created_at=_required(data, "createdAt"),
            name=_optional(data, "name"),
            folder_id=_optional(data, "folderId"),
            content_size=content_size,
        )


@dataclass
class NewDocument:
    """A created document.

    ``existed`` is never sent by the server. It is set when
    create_document_if_not_exists found the document already there and
    fetched its metadata instead.
    """

    id: str
    name: str
    path: str
    project: str
    created_at: str
    existed: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "NewDocument":
        data = _expect_object(data)
        return cls(
            id=_required(data, "id"),
            name=_required(data, "name"),
            path=_required(data, "path"),
            project=_required(data, "project"),
            created_at=_required(data, "createdAt"),
            existed=False,
        )

    @classmethod
    def from_meta(cls, meta: DocumentMeta, name: str) -> "NewDocument":
        return cls(
            id=meta.id,
            name=name,
            path=meta.path,
            project=meta.project,
            created_at=meta.created_at,
            existed=True,
        )


@dataclass
class DeletedDocument:
    deleted: bool


@dataclass
class UpdatedDocument:
    changed: bool

    @classmethod
    def from_dict(cls, data: Any) -> "UpdatedDocument":
        data = _expect_object(data)
        changed = _optional(data, "changed", bool)
        return cls(changed=bool(changed))


# --- Folders ---


@dataclass
class FolderStats:
    documents: int
    folders: int


@dataclass
class Folder:
    """A folder in a project. ``stats`` is only set when requested."""

    id: str
    name: str
    path: str
    project: str
    created_at: str
    updated_at: str
    stats: Optional[FolderStats] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Folder":
        data = _expect_object(data)
        stats = None
        if data.get("stats") is not None:
            raw = _expect_object(data["stats"], "stats")
            stats = FolderStats(
                documents=_required(raw, "documents", int),
                folders=_required(raw, "folders", int),
            )

        return cls(
            id=_required(data, "id"),
            name=_required(data, "name"),
            path=_required(data, "path"),
            project=_required(data, "project"),
            created_at=_required(data, "createdAt"),
            updated_at=_required(data, "updatedAt"),
            stats=stats,
        )


# --- Inputs ---


@dataclass
class CreateDocumentInput:
    name: str
    project: str
    content: str
    folder: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "name": self.name,
            "project": self.project,
            "content": self.content,
        }
        if self.folder is not None:
            body["folder"] = self.folder
        return body


@dataclass
class CreateFolderInput:
    name: str
    project: str
    folder: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"name": self.name, "project": self.project}
        if self.folder is not None:
            body["folder"] = self.folder
        return body


@dataclass
class UploadDocumentInput:
    """Upload a local JSON file. ``name`` defaults to the file's base name."""

    file_path: str
    project: str
    name: Optional[str] = None
    folder: Optional[str] = None
