"""JSON file sink for saving and restoring store snapshots."""

import json
import logging
from pathlib import Path
from typing import Any, Callable

from estate_ledger.exceptions import SinkError
from estate_ledger.sinks import serialization
from estate_ledger.sinks.serialization import to_dict
from estate_ledger.store.estate import EstateDataStore

logger = logging.getLogger(__name__)

# Entity files in load order, with the parser for each record
_ENTITY_FILES: list[tuple[str, Callable[[dict], Any]]] = [
    ("departments", serialization.department_from_dict),
    ("roles", serialization.role_from_dict),
    ("users", serialization.user_from_dict),
    ("agents", serialization.agent_from_dict),
    ("properties", serialization.property_from_dict),
    ("tenants", serialization.tenant_from_dict),
    ("payments", serialization.payment_from_dict),
    ("maintenance", serialization.maintenance_from_dict),
    ("commission_payments", serialization.commission_payment_from_dict),
    ("audit_log", serialization.audit_entry_from_dict),
    ("notifications", serialization.notification_from_dict),
    ("sms_log", serialization.sms_entry_from_dict),
    ("email_log", serialization.email_entry_from_dict),
]

_KEYED = {
    "departments": "department_id",
    "roles": "role_id",
    "users": "user_id",
    "agents": "agent_id",
    "properties": "property_id",
    "tenants": "tenant_id",
}


class JsonFileSink:
    """Output data to JSON files."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SinkError(f"Cannot create output directory {self.output_dir}: {exc}") from exc
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to ``<entity_type>.json``."""
        file_path = self.output_dir / f"{entity_type}.json"
        data = [to_dict(record) for record in records]

        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(data, f, ensure_ascii=False, default=str)
        except OSError as exc:
            raise SinkError(f"Failed to write {file_path}: {exc}") from exc

        self._counts[entity_type] = len(records)

    def write_store(self, store: EstateDataStore) -> dict[str, int]:
        """Write every entity collection of a store, one file each."""
        for entity_type, _ in _ENTITY_FILES:
            collection = getattr(store, entity_type)
            records = list(collection.values()) if isinstance(collection, dict) else collection
            self.write_batch(entity_type, records)
        return dict(self._counts)

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def close(self) -> None:
        """Log a summary of what was written."""
        logger.info("JSON files written to: %s", self.output_dir)
        for entity_type, count in self._counts.items():
            logger.info("  %s: %d records", entity_type, count)


def load_store(directory: str | Path, **store_kwargs: Any) -> EstateDataStore:
    """Rebuild a store from a directory written by ``JsonFileSink.write_store``.

    Missing files load as empty collections. Records are restored as saved,
    so occupancy and payment statuses are not re-derived.

    Raises
    ------
    SinkError
        If a file cannot be read or is not a JSON list.
    ValidationError
        If a record carries an unknown enum value.
    """
    directory = Path(directory)
    store = EstateDataStore(**store_kwargs)

    for entity_type, parser in _ENTITY_FILES:
        file_path = directory / f"{entity_type}.json"
        if not file_path.exists():
            continue
        try:
            with open(file_path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise SinkError(f"Failed to read {file_path}: {exc}") from exc
        if not isinstance(raw, list):
            raise SinkError(f"{file_path} does not contain a JSON list")

        records = [parser(item) for item in raw]
        key = _KEYED.get(entity_type)
        if key is not None:
            getattr(store, entity_type).update({getattr(r, key): r for r in records})
        else:
            getattr(store, entity_type).extend(records)
        logger.debug("Loaded %d %s from %s", len(records), entity_type, file_path)

    store.reindex()
    return store
