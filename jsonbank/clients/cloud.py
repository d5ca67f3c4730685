"""
JsonBank Cloud Client

Client for the JsonBank document storage API: public content, own documents,
folders, and API key authentication.

Public reads go to ``{host}``; everything tied to an API key goes to
``{host}/v1`` with the keys sent as ``jsb-pub-key`` / ``jsb-prv-key`` headers.
"""

import logging
import threading
from typing import Any, Dict, Optional, Tuple

import requests

from jsonbank.errors import (
    DEFAULT_ERROR_CODE,
    JsbError,
    err_bad_request,
    err_invalid_json,
    err_not_authenticated,
)
from jsonbank.models import (
    DEFAULT_HOST,
    PRIVATE,
    PUBLIC,
    AuthenticatedIdentity,
    Config,
    CreateDocumentInput,
    CreateFolderInput,
    DeletedDocument,
    DocumentMeta,
    Endpoints,
    Folder,
    InitConfig,
    Keys,
    NewDocument,
    UpdatedDocument,
    UploadDocumentInput,
)
from jsonbank.paths import (
    file_base_name,
    is_valid_json,
    make_document_path,
    make_folder_path,
    read_text_file,
)
from jsonbank.responses import decode, decode_as_text

logger = logging.getLogger(__name__)

PUBLIC_KEY_HEADER = "jsb-pub-key"
PRIVATE_KEY_HEADER = "jsb-prv-key"

# Server error codes the client recovers from
NAME_EXISTS = "name.exists"
NOT_FOUND = "notFound"

_DEFAULT_TIMEOUT = 60


def make_endpoints(host: str) -> Endpoints:
    """Derive the API base urls from a host. The host is not validated."""
    return Endpoints(v1=f"{host}/v1", public=host)


class JsonBank:
    """Client for the JsonBank API."""

    def __init__(
        self,
        config: Optional[InitConfig] = None,
        session: Optional[requests.Session] = None,
        timeout: float = _DEFAULT_TIMEOUT,
    ):
        config = config or InitConfig()
        host = config.host or DEFAULT_HOST

        self.config = Config(host=host, keys=config.keys)
        self.endpoints = make_endpoints(host)
        self.timeout = timeout
        self._session = session or requests.Session()

        self._identity: Optional[AuthenticatedIdentity] = None
        self._identity_lock = threading.Lock()

    # --- Configuration ---

    @property
    def host(self) -> str:
        return self.config.host

    @host.setter
    def host(self, host: str) -> None:
        self.set_host(host)

    def set_host(self, host: str) -> None:
        """Change the host and recompute the endpoints."""
        self.config.host = host
        self.endpoints = make_endpoints(host)

    @property
    def keys(self) -> Keys:
        return self.config.keys or Keys()

    def _public_url(self, *paths: str) -> str:
        return "/".join((self.endpoints.public,) + paths)

    def _v1_url(self, *paths: str) -> str:
        return "/".join((self.endpoints.v1,) + paths)

    # --- Request dispatch ---

    def dispatch(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]] = None,
        require_public_key: bool = False,
        require_private_key: bool = False,
    ) -> requests.Response:
        """Send one request, attaching the API keys it needs.

        Args:
            method: GET, POST or DELETE
            url: Full request url
            body: Query parameters for GET, JSON body for POST, ignored for DELETE
            require_public_key: Send the public key, failing if it isn't set
            require_private_key: Send the private key, failing if it isn't set

        Returns:
            The raw response, whatever its status

        Raises:
            JsbError: ``bad_request`` if a required key is missing (nothing is
                sent), or the default code if the request itself fails
        """
        method = method.upper()
        headers = {"Content-Type": "application/json"}
        keys = self.keys

        if require_public_key:
            if not keys.has_key(PUBLIC):
                raise err_bad_request("Public key is not set")
            headers[PUBLIC_KEY_HEADER] = keys.get_key(PUBLIC)

        if require_private_key:
            if not keys.has_key(PRIVATE):
                raise err_bad_request("Private key is not set")
            headers[PRIVATE_KEY_HEADER] = keys.get_key(PRIVATE)

        kwargs: Dict[str, Any] = {"headers": headers, "timeout": self.timeout}
        if method == "GET":
            if body:
                kwargs["params"] = body
        elif method == "POST":
            kwargs["json"] = body if body is not None else {}
        elif method != "DELETE":
            raise ValueError(f"Unsupported method: {method}")

        logger.debug("%s %s", method, url)
        try:
            return self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning("Request failed: %s %s: %s", method, url, e)
            raise JsbError(DEFAULT_ERROR_CODE, str(e)) from e

    # --- Public content ---

    def get_document_meta(self, id_or_path: str) -> DocumentMeta:
        """Get metadata of a public document."""
        response = self.dispatch("GET", self._public_url("meta", "f", id_or_path))
        return DocumentMeta.from_dict(decode(response))

    def get_content(self, id_or_path: str) -> Any:
        """Get the parsed content of a public document."""
        return decode(self.dispatch("GET", self._public_url("f", id_or_path)))

    def get_content_as_string(self, id_or_path: str) -> str:
        return decode_as_text(self.dispatch("GET", self._public_url("f", id_or_path)))

    def get_github_content(self, path: str) -> Any:
        """Get a JSON file from a public GitHub repository's default branch.

        Args:
            path: ``{owner}/{repo}/{file path}``, e.g. ``jsonbankio/documentation/index.json``
        """
        return decode(self.dispatch("GET", self._public_url("gh", path)))

    def get_github_content_as_string(self, path: str) -> str:
        return decode_as_text(self.dispatch("GET", self._public_url("gh", path)))

    # --- Own documents ---

    def get_own_document_meta(self, id_or_path: str) -> DocumentMeta:
        response = self.dispatch(
            "GET", self._v1_url("meta", "file", id_or_path), require_public_key=True
        )
        return DocumentMeta.from_dict(decode(response))

    def get_own_content(self, id_or_path: str) -> Any:
        """Get the parsed content of a document owned by the api key."""
        response = self.dispatch(
            "GET", self._v1_url("file", id_or_path), require_public_key=True
        )
        return decode(response)

    def get_own_content_as_string(self, id_or_path: str) -> str:
        response = self.dispatch(
            "GET", self._v1_url("file", id_or_path), require_public_key=True
        )
        return decode_as_text(response)

    def has_own_document(self, id_or_path: str) -> bool:
        """Check if an owned document exists.

        Returns False only when the server answers ``notFound``; any other
        error is raised.
        """
        try:
            self.get_own_document_meta(id_or_path)
        except JsbError as e:
            if e.code == NOT_FOUND:
                return False
            raise
        return True

    def create_document(self, document: CreateDocumentInput) -> NewDocument:
        """Create a document in a project.

        Raises:
            JsbError: ``bad_request`` for a missing project, name or content and
                ``invalid_json_content`` for non-JSON content, before any
                request is sent
        """
        if not document.project:
            raise err_bad_request("Project is required")
        if not document.name:
            raise err_bad_request("Name is required")
        if not document.content:
            raise err_bad_request("Content is required")
        if not is_valid_json(document.content):
            raise err_invalid_json()

        response = self.dispatch(
            "POST",
            self._v1_url("project", document.project, "document"),
            body=document.to_body(),
            require_private_key=True,
        )
        return NewDocument.from_dict(decode(response))

    def create_document_if_not_exists(self, document: CreateDocumentInput) -> NewDocument:
        """Create a document, or fetch it if the name is already taken.

        The returned document has ``existed=True`` when it was fetched.
        """
        try:
            return self.create_document(document)
        except JsbError as e:
            if e.code != NAME_EXISTS:
                raise

        path = make_document_path(document)
        logger.debug("Document %s already exists, fetching it", path)
        meta = self.get_own_document_meta(path)
        return NewDocument.from_meta(meta, document.name)

    def update_own_document(self, id_or_path: str, content: str) -> UpdatedDocument:
        if not is_valid_json(content):
            raise err_invalid_json()

        response = self.dispatch(
            "POST",
            self._v1_url("file", id_or_path),
            body={"content": content},
            require_private_key=True,
        )
        return UpdatedDocument.from_dict(decode(response))

    def upload_document(self, upload: UploadDocumentInput) -> NewDocument:
        """Create a document from a local JSON file."""
        if not upload.project:
            raise err_bad_request("Project is required")

        content = read_text_file(upload.file_path)
        if not is_valid_json(content):
            raise err_invalid_json()

        return self.create_document(
            CreateDocumentInput(
                name=upload.name or file_base_name(upload.file_path),
                project=upload.project,
                content=content,
                folder=upload.folder,
            )
        )

    def delete_document(self, id_or_path: str) -> DeletedDocument:
        """Delete an owned document.

        A document that is already gone gives ``deleted=False`` instead of
        an error.
        """
        try:
            response = self.dispatch(
                "DELETE", self._v1_url("file", id_or_path), require_private_key=True
            )
            data = decode(response)
        except JsbError as e:
            if e.code == NOT_FOUND:
                logger.debug("Document %s not found, nothing to delete", id_or_path)
                return DeletedDocument(deleted=False)
            raise

        deleted = data.get("deleted") if isinstance(data, dict) else None
        return DeletedDocument(deleted=deleted is True)

    # --- Folders ---

    def create_folder(self, folder: CreateFolderInput) -> Folder:
        if not folder.project:
            raise err_bad_request("Project is required")
        if not folder.name:
            raise err_bad_request("Name is required")

        response = self.dispatch(
            "POST",
            self._v1_url("project", folder.project, "folder"),
            body=folder.to_body(),
            require_private_key=True,
        )
        return Folder.from_dict(decode(response))

    def get_folder(self, id_or_path: str) -> Folder:
        response = self.dispatch(
            "GET", self._v1_url("folder", id_or_path), require_public_key=True
        )
        return Folder.from_dict(decode(response))

    def get_folder_with_stats(self, id_or_path: str) -> Folder:
        """Get a folder along with its document and sub-folder counts."""
        response = self.dispatch(
            "GET",
            self._v1_url("folder", id_or_path),
            body={"stats": "true"},
            require_public_key=True,
        )
        return Folder.from_dict(decode(response))

    def create_folder_if_not_exists(self, folder: CreateFolderInput) -> Tuple[Folder, bool]:
        """Create a folder, or fetch it if the name is already taken.

        Returns:
            (folder, existed)
        """
        try:
            return self.create_folder(folder), False
        except JsbError as e:
            if e.code != NAME_EXISTS:
                raise

        path = make_folder_path(folder)
        logger.debug("Folder %s already exists, fetching it", path)
        return self.get_folder(path), True

    # --- Auth ---

    def authenticate(self) -> AuthenticatedIdentity:
        """Verify the public key and cache who it belongs to."""
        response = self.dispatch("POST", self._v1_url("authenticate"), require_public_key=True)
        identity = AuthenticatedIdentity.from_dict(decode(response))

        with self._identity_lock:
            self._identity = identity
        return identity

    def get_username(self) -> str:
        with self._identity_lock:
            identity = self._identity
        if identity is None:
            raise err_not_authenticated()
        return identity.username

    def is_authenticated(self) -> bool:
        with self._identity_lock:
            identity = self._identity
        return identity is not None and identity.authenticated
