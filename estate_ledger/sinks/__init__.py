"""Output sinks for exporting and restoring store snapshots."""

from estate_ledger.sinks.json_file import JsonFileSink, load_store

__all__ = ["JsonFileSink", "load_store"]
