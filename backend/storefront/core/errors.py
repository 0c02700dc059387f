"""Domain exceptions shared by the services and translated at the route layer."""

from __future__ import annotations


class SettingsValidationError(ValueError):
    """A settings write was rejected before touching the database."""


class BackingStoreError(RuntimeError):
    """The persistence layer failed; the driver error is chained as ``__cause__``."""


class StoreReadError(BackingStoreError):
    pass


class StoreWriteError(BackingStoreError):
    pass
