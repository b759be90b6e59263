"""In-memory application state with referential integrity."""

from estate_ledger.store.estate import EstateDataStore, PaymentPreview, StoreSlice

__all__ = ["EstateDataStore", "PaymentPreview", "StoreSlice"]
