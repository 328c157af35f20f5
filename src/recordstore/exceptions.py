"""recordstore exceptions."""


class RecordStoreError(Exception):
    """Base exception for all recordstore errors."""


class RecordNotFound(RecordStoreError):
    """Raised by the HTTP layer when a record ID does not exist."""

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"ID '{record_id}' Not Found")


class ConfigError(RecordStoreError):
    """Raised on invalid configuration."""
