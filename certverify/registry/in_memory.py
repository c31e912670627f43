from collections.abc import Iterable

from certverify.registry.base import BaseRegistry
from certverify.registry.models import RegistryRecord


class InMemoryRegistry(BaseRegistry):
    """Registry over a fixed record set, indexed once at construction."""

    def __init__(self, records: Iterable[RegistryRecord]) -> None:
        self._records: tuple[RegistryRecord, ...] = tuple(records)
        self._by_fingerprint: dict[str, RegistryRecord] = {}
        self._by_number: dict[str, list[RegistryRecord]] = {}
        for record in self._records:
            self._by_fingerprint.setdefault(record.fingerprint.lower(), record)
            self._by_number.setdefault(record.certificate_number.upper(), []).append(record)

    @property
    def records(self) -> tuple[RegistryRecord, ...]:
        return self._records

    def find_by_fingerprint(self, fingerprint: str) -> RegistryRecord | None:
        return self._by_fingerprint.get(fingerprint.lower())

    def find_by_certificate_number(self, certificate_number: str) -> list[RegistryRecord]:
        return list(self._by_number.get(certificate_number.upper(), []))
