"""
Local draft store: the offline-first mirror of the resume being edited.

The whole draft lives under one key in a key/value backend (browser-style
local storage). Every partial save merges into what is already stored, so a
form step only needs to send the section it owns.
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol, Union

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import DraftStorageError
from ..schemas.draft import (
    DRAFT_SCHEMA_VERSION,
    SECTION_ITEM_TYPES,
    ResumeDraft,
    new_item_id,
)

logger = logging.getLogger(__name__)

STORAGE_KEY = "resumeBuilder"


class StorageBackend(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process backend, mainly for tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """One JSON file per key inside ``directory``."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def _camel(key: str) -> str:
    return to_camel(key) if "_" in key else key


def epoch_millis() -> int:
    return int(time.time() * 1000)


# --- schema migration ---

def _migrate_v1_to_v2(data: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(data.get("personalInfo"), dict):
        data.pop("personalInfo", None)

    if isinstance(data.get("skills"), str):
        data["skills"] = [s.strip() for s in data["skills"].split(",") if s.strip()]

    for section in SECTION_ITEM_TYPES:
        items = data.get(section)
        if not isinstance(items, list):
            data.pop(section, None)
            continue
        migrated = []
        for item in items:
            if not isinstance(item, dict):
                continue
            item = dict(item)
            if not item.get("id"):
                item["id"] = new_item_id()
            if section != "projects":
                item.setdefault("current", False)
            migrated.append(item)
        data[section] = migrated

    data["schemaVersion"] = 2
    return data


MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    1: _migrate_v1_to_v2,
}


def migrate_draft(data: Dict[str, Any]) -> Dict[str, Any]:
    """Bring a stored draft up to ``DRAFT_SCHEMA_VERSION``.

    Drafts written before versioning existed count as version 1.
    """
    version = data.get("schemaVersion", 1)
    if not isinstance(version, int) or version > DRAFT_SCHEMA_VERSION:
        raise DraftStorageError("Unsupported draft schema version", {"schemaVersion": version})

    while version < DRAFT_SCHEMA_VERSION:
        data = MIGRATIONS[version](data)
        version = data["schemaVersion"]
    return data


def default_draft() -> ResumeDraft:
    return ResumeDraft()


def _without_nulls(data: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = {k: v for k, v in data.items() if v is not None}
    if isinstance(cleaned.get("personalInfo"), dict):
        cleaned["personalInfo"] = {k: v for k, v in cleaned["personalInfo"].items() if v is not None}
    return cleaned


def _drop_invalid(data: Dict[str, Any], errors: list) -> bool:
    """Remove whatever each validation error points at. Returns False if nothing was removed."""
    bad_items: Dict[str, set] = {}
    removed = False
    for err in errors:
        loc = err.get("loc", ())
        if not loc or loc[0] not in data:
            continue
        key = loc[0]
        value = data[key]
        if key == "personalInfo" and len(loc) > 1 and isinstance(value, dict) and loc[1] in value:
            value.pop(loc[1])
            removed = True
        elif isinstance(value, list) and len(loc) > 1 and isinstance(loc[1], int):
            bad_items.setdefault(key, set()).add(loc[1])
        else:
            data.pop(key)
            removed = True

    for key, indexes in bad_items.items():
        data[key] = [item for i, item in enumerate(data[key]) if i not in indexes]
        removed = True
    return removed


def _validate_leniently(data: Dict[str, Any]) -> ResumeDraft:
    """
    Validate a stored draft, replacing only the fields (or list entries) that
    are null or invalid with their defaults. The rest of the draft survives.
    """
    data = _without_nulls(data)
    while True:
        try:
            return ResumeDraft.model_validate(data)
        except ValidationError as e:
            logger.warning("Stored draft has invalid fields, using defaults for them: %s", e.errors())
            if not _drop_invalid(data, e.errors()):
                raise


def merge_draft(current: Dict[str, Any], partial: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge a partial draft (camelCase or snake_case keys) over ``current``.

    Top-level values present and not None replace wholesale; ``personalInfo``
    merges one level deeper. ``current`` is not modified.
    """
    merged = dict(current)
    for key, value in partial.items():
        key = _camel(key)
        if value is None or key in ("lastUpdated", "schemaVersion"):
            continue
        if hasattr(value, "model_dump"):
            value = value.model_dump(mode="json", by_alias=True, exclude_unset=key == "personalInfo")
        elif isinstance(value, list):
            value = [v.model_dump(mode="json", by_alias=True) if hasattr(v, "model_dump") else v for v in value]
        if key == "personalInfo":
            value = {_camel(k): v for k, v in value.items()}
            merged["personalInfo"] = {**merged.get("personalInfo", {}), **value}
        else:
            merged[key] = value
    return merged


class DraftStore:
    def __init__(
        self,
        storage: StorageBackend,
        key: str = STORAGE_KEY,
        clock: Callable[[], int] = epoch_millis,
    ):
        self.storage = storage
        self.key = key
        self.clock = clock

    def load(self) -> ResumeDraft:
        """
        Read the stored draft, falling back to defaults key by key.

        Never raises: unreadable, corrupt or unsupported data is logged and
        the default draft is returned instead.
        """
        try:
            raw = self.storage.get_item(self.key)
            if not raw:
                return default_draft()

            data = json.loads(raw)
            if not isinstance(data, dict):
                raise DraftStorageError("Stored draft is not an object")
            data = migrate_draft(data)

            return _validate_leniently(data)
        except Exception:
            logger.exception("Error loading resume draft from local storage")
            return default_draft()

    def save(self, partial: Union[ResumeDraft, Dict[str, Any]]) -> ResumeDraft:
        """
        Merge ``partial`` into the stored draft and write the result.

        Top-level keys present (and not None) in ``partial`` replace the stored
        value wholesale; ``personalInfo`` merges one level deeper.
        """
        if isinstance(partial, ResumeDraft):
            partial = partial.to_storage()

        current = merge_draft(self.load().to_storage(), partial)
        current["lastUpdated"] = self.clock()
        current["schemaVersion"] = DRAFT_SCHEMA_VERSION

        draft = ResumeDraft.model_validate(current)
        self.storage.set_item(self.key, json.dumps(draft.to_storage()))
        logger.debug("Saved draft at %s", current["lastUpdated"])
        return draft

    def clear(self) -> None:
        self.storage.remove_item(self.key)
