"""
Configuration and data loading/saving for SettleLedger
"""
from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Iterable, List, Optional

from models import MalformedSnapshot, PersistenceUnavailable, SplitRecord
from utils import app_dir, safe_float

logger = logging.getLogger(__name__)

STORAGE_KEY = "settlementsData"


@dataclass
class Settings:
    """Application settings, read from settings.json in the data directory"""
    data_dir: str = field(default_factory=app_dir)
    storage_file: str = "storage.json"
    storage_key: str = STORAGE_KEY
    currency: str = "Rupees"
    eps: float = 1e-6

    @property
    def storage_path(self) -> str:
        return os.path.join(self.data_dir, self.storage_file)


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from JSON file, falling back to defaults"""
    base = app_dir()
    path = path or os.path.join(base, "settings.json")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return Settings(data_dir=base)
    except (ValueError, RecursionError):
        logger.warning("settings file %s is corrupt, using defaults", path)
        return Settings(data_dir=base)
    if not isinstance(data, dict):
        logger.warning("settings file %s is not a JSON object, using defaults", path)
        return Settings(data_dir=base)

    known = {f.name for f in fields(Settings)}
    kwargs = {k: v for k, v in data.items() if k in known}
    kwargs.setdefault("data_dir", base)
    if "eps" in kwargs:
        kwargs["eps"] = safe_float(kwargs["eps"], Settings.eps)
    return Settings(**kwargs)


def records_to_json(records: Iterable[SplitRecord]) -> str:
    """Serialize split records as a JSON array of {from, to, amount}"""
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


def records_from_json(text: str) -> List[SplitRecord]:
    """Parse a JSON array of {from, to, amount}; raises MalformedSnapshot"""
    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError) as ex:
        raise MalformedSnapshot(f"stored ledger is not valid JSON: {ex}") from ex
    if not isinstance(data, list):
        raise MalformedSnapshot("stored ledger must be a JSON array")
    return [SplitRecord.from_dict(d) for d in data]


class JsonBlobStore:
    """
    Key-value blob store backed by a single JSON file.
    The ledger lives under one well-known key as a JSON string.
    """

    def __init__(self, path: str, key: str = STORAGE_KEY):
        self.path = path
        self.key = key

    def _read_all(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (ValueError, RecursionError):
            logger.warning("storage file %s is corrupt, ignoring it", self.path)
            return {}
        except OSError as ex:
            raise PersistenceUnavailable(str(ex)) from ex
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def put(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as ex:
            raise PersistenceUnavailable(str(ex)) from ex

    def save(self, records: Iterable[SplitRecord]) -> None:
        """Overwrite the stored ledger"""
        self.put(self.key, records_to_json(records))

    def load(self) -> List[SplitRecord]:
        """Stored ledger, or [] when absent, unreadable or malformed"""
        try:
            text = self.get(self.key)
        except PersistenceUnavailable as ex:
            logger.warning("could not read stored ledger: %s", ex)
            return []
        if not text:
            return []
        try:
            return records_from_json(text)
        except MalformedSnapshot as ex:
            logger.warning("ignoring malformed stored ledger: %s", ex)
            return []


def get_default_store(settings: Settings) -> JsonBlobStore:
    """Store for the configured data directory"""
    return JsonBlobStore(settings.storage_path, settings.storage_key)
