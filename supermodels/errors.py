"""Persistence exceptions raised by the store layer."""

from __future__ import annotations


class StoreError(RuntimeError):
    """Base class for store failures raised by this package."""


class BucketNotFoundError(StoreError):
    """Raised when a transaction addresses a bucket that was never created."""

    def __init__(self, name: str):
        super().__init__(f"bucket_not_found: {name}")
        self.name = name
