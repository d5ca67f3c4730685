"""
Path and file utilities for JsonBank.

Document/folder path building, JSON content validation, and reading local
files for upload.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from jsonbank.errors import JsbError
from jsonbank.models import CreateDocumentInput, CreateFolderInput


def make_path(project: str, name: str, folder: Optional[str] = None) -> str:
    """Build the full path of an item: ``{project}/{folder/}{name}``."""
    prefix = f"{folder}/" if folder else ""
    return f"{project}/{prefix}{name}"


def make_document_path(document: CreateDocumentInput) -> str:
    return make_path(document.project, document.name, document.folder)


def make_folder_path(folder: CreateFolderInput) -> str:
    return make_path(folder.project, folder.name, folder.folder)


def is_valid_json(content: str) -> bool:
    try:
        json.loads(content)
    except (TypeError, ValueError):
        return False
    return True


def file_base_name(file_path: Union[str, Path]) -> str:
    return os.path.basename(str(file_path))


def read_text_file(file_path: Union[str, Path]) -> str:
    """Read a UTF-8 text file for upload.

    Raises:
        JsbError: ``file_not_found`` if nothing exists at the path,
            ``invalid_file`` if it exists but can't be read as text
    """
    path = Path(file_path)
    if not path.exists():
        raise JsbError("file_not_found", f"File not found: {file_path}")

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise JsbError("invalid_file", f"Unable to read file: {e}") from e
