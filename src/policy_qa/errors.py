"""Exceptions raised across the policy assistant."""


class PolicyQAError(Exception):
    """Base class for policy assistant errors."""


class PolicyStoreError(PolicyQAError):
    """A policy store could not complete a lookup or write."""


class IngestionError(PolicyQAError):
    """A policy document could not be loaded or parsed."""

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source
