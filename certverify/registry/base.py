from abc import ABC, abstractmethod

from certverify.registry.models import RegistryRecord


class BaseRegistry(ABC):
    """Read-only lookup interface over a set of registry records."""

    @abstractmethod
    def find_by_fingerprint(self, fingerprint: str) -> RegistryRecord | None:
        """Return the first record whose fingerprint equals ``fingerprint``."""

    @abstractmethod
    def find_by_certificate_number(self, certificate_number: str) -> list[RegistryRecord]:
        """Return every record carrying ``certificate_number``, in record-set order."""
