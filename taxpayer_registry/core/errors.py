class RegistryError(Exception):
    """Base class for registry failures."""


class DuplicateTaxPayerError(RegistryError):
    def __init__(self, tid: str):
        self.tid = tid
        super().__init__(f"TaxPayer '{tid}' is already registered")


class SnapshotError(RegistryError):
    """Raised when a snapshot file cannot be read back."""


class RegistryUnavailableError(RegistryError):
    """The registry could not be reached or answered unexpectedly."""
