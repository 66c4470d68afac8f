"""Import and export of dictionary overrides as JSON documents."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError

from ..dictionary import DictionaryService

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"

CategoryId = Literal[
    "proper",
    "pause_proper",
    "no_split_before",
    "no_split_after",
    "number",
    "no_number_after",
    "no_number_before",
]


class DictionaryImportError(ValueError):
    """Raised when a dictionary document cannot be imported."""


class CategoryWords(BaseModel):
    """Word list of one category."""

    id: CategoryId
    words: list[str]


class DictionaryExport(BaseModel):
    """Exported dictionary document."""

    version: str
    timestamp: str = ""
    categories: list[CategoryWords]


def parse_dictionary_document(text: str) -> DictionaryExport:
    """Parse and validate a dictionary document.

    Args:
        text: JSON document

    Returns:
        Validated document

    Raises:
        DictionaryImportError: If the JSON is invalid or does not match the format
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DictionaryImportError(f"Invalid JSON in dictionary file: {e}") from e

    if not isinstance(data, dict) or not data.get("version"):
        raise DictionaryImportError("Invalid dictionary file format: missing version")
    if not isinstance(data.get("categories"), list):
        raise DictionaryImportError("Invalid dictionary file format: categories must be a list")

    try:
        return DictionaryExport.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise DictionaryImportError(f"Invalid dictionary categories: {problems}") from e


async def export_dictionaries(service: DictionaryService) -> DictionaryExport:
    """Snapshot every category of a dictionary service."""
    words = await service.get_all()
    return DictionaryExport(
        version=EXPORT_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        categories=[CategoryWords(id=category, words=w) for category, w in words.items()],
    )


async def export_to_file(service: DictionaryService, path: str | Path) -> Path:
    """Write every category to a JSON file.

    Args:
        service: Dictionary service to export
        path: Destination file

    Returns:
        Path of the written file
    """
    path = Path(path)
    document = await export_dictionaries(service)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document.model_dump(), f, ensure_ascii=False, indent=2)
    logger.info("Exported %d categories to %s", len(document.categories), path)
    return path


def import_document(service: DictionaryService, document: DictionaryExport) -> int:
    """Save every category of a validated document as an override."""
    for category in document.categories:
        service.save(category.id, category.words)
    return len(document.categories)


def import_from_file(service: DictionaryService, path: str | Path) -> int:
    """Validate a dictionary file, then save its categories.

    Nothing is written unless the whole file is valid.

    Args:
        service: Dictionary service receiving the overrides
        path: JSON file to import

    Returns:
        Number of imported categories

    Raises:
        DictionaryImportError: If the file cannot be read or is invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DictionaryImportError(f"Could not read dictionary file {path}: {e}") from e

    document = parse_dictionary_document(text)
    count = import_document(service, document)
    logger.info("Imported %d categories from %s", count, path)
    return count


def validate_dictionary_file(path: str | Path) -> bool:
    """Check whether a file is an importable dictionary document."""
    try:
        parse_dictionary_document(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, DictionaryImportError) as e:
        logger.info("Dictionary file %s is not valid: %s", path, e)
        return False
    return True
