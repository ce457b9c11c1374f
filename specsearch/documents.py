"""Load spec documents for searching from YAML or JSON files."""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

import msgspec
import yaml

from .exceptions import DocumentLoadError
from .search.models import SearchableDocument

logger = logging.getLogger(__name__)

_DATE_FIELDS = ("created", "updated")


def _normalize(raw: dict[str, Any]) -> dict[str, Any]:
    """Coerce YAML-native values into the document schema."""
    record = dict(raw)

    updated_at = record.pop("updated_at", None)
    if updated_at is not None and record.get("updated") is None:
        record["updated"] = updated_at

    for key in _DATE_FIELDS:
        value = record.get(key)
        if isinstance(value, datetime):
            record[key] = value.date().isoformat()
        elif isinstance(value, date):
            record[key] = value.isoformat()
        elif isinstance(value, str):
            # timestamps keep only their YYYY-MM-DD part
            record[key] = value[:10]

    tags = record.get("tags")
    if isinstance(tags, str):
        record["tags"] = [tag.strip() for tag in tags.split(",") if tag.strip()]

    if "name" not in record and "path" in record:
        record["name"] = record["path"]

    return record


def documents_from_records(records: list[dict[str, Any]]) -> list[SearchableDocument]:
    """Convert plain dictionaries into documents.

    Raises:
        msgspec.ValidationError: If a record does not fit the schema
    """
    return msgspec.convert(
        [_normalize(record) for record in records],
        list[SearchableDocument],
    )


def load_documents(path: Path) -> list[SearchableDocument]:
    """Load a list of documents from a YAML or JSON file.

    The file holds either a list of document mappings or a mapping with a
    ``documents`` key. YAML is a superset of JSON, so one loader reads both.

    Raises:
        DocumentLoadError: If the file is missing, malformed or invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise DocumentLoadError(str(path), e.strerror or str(e)) from e
    except yaml.YAMLError as e:
        raise DocumentLoadError(str(path), f"invalid YAML: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("documents", [])
    if not isinstance(data, list):
        raise DocumentLoadError(str(path), "expected a list of documents")

    try:
        documents = documents_from_records(data)
    except (msgspec.ValidationError, TypeError, ValueError) as e:
        raise DocumentLoadError(str(path), str(e)) from e

    logger.debug("Loaded %d documents from %s", len(documents), path)
    return documents
