from dataclasses import dataclass


@dataclass(frozen=True)
class RegistryRecord:
    """Authoritative certificate fact from the registry or its local mirror."""

    certificate_number: str
    fingerprint: str
    holder_name: str
    institution: str
    course: str
    year: int
