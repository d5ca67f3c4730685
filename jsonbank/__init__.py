"""
JsonBank SDK

A Python client for JsonBank, a hosted JSON document store.
"""

from jsonbank.api import load_client_from_env
from jsonbank.clients.cloud import JsonBank, make_endpoints
from jsonbank.errors import JsbError
from jsonbank.models import (
    DEFAULT_HOST,
    JSONBANK,
    AuthenticatedIdentity,
    AuthenticatedKey,
    ContentSize,
    CreateDocumentInput,
    CreateFolderInput,
    DeletedDocument,
    DocumentMeta,
    Endpoints,
    Folder,
    FolderStats,
    InitConfig,
    Keys,
    NewDocument,
    UpdatedDocument,
    UploadDocumentInput,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DEFAULT_HOST",
    "JSONBANK",
    "JsonBank",
    "JsbError",
    "load_client_from_env",
    "make_endpoints",
    # Config
    "InitConfig",
    "Keys",
    "Endpoints",
    # Results
    "AuthenticatedIdentity",
    "AuthenticatedKey",
    "ContentSize",
    "DeletedDocument",
    "DocumentMeta",
    "Folder",
    "FolderStats",
    "NewDocument",
    "UpdatedDocument",
    # Inputs
    "CreateDocumentInput",
    "CreateFolderInput",
    "UploadDocumentInput",
]
