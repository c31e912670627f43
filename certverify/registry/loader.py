import json
from pathlib import Path
from typing import Any

from certverify.registry.exceptions import RegistryLoadError
from certverify.registry.models import RegistryRecord

_DEFAULT_MIRROR = Path(__file__).parent / "data" / "registry_mirror.json"
_STRING_FIELDS = ("certificate_number", "fingerprint", "holder_name", "institution", "course")


def load_registry_records(path: Path | None = None) -> list[RegistryRecord]:
    """Load registry records from a JSON mirror file.

    Args:
        path: Path to a JSON array of record objects.
              Defaults to the bundled registry_mirror.json.

    Returns:
        Records in file order.

    Raises:
        RegistryLoadError: if the file cannot be read or a record is malformed.
    """
    if path is None:
        path = _DEFAULT_MIRROR
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RegistryLoadError(f"Failed to read registry mirror: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RegistryLoadError(f"Invalid JSON in registry mirror: {exc}") from exc

    if not isinstance(raw, list):
        raise RegistryLoadError("Registry mirror must be a JSON array")
    return [_build_record(item, index) for index, item in enumerate(raw)]


def _build_record(raw: Any, index: int) -> RegistryRecord:
    if not isinstance(raw, dict):
        raise RegistryLoadError(f"Record at index {index} must be an object")
    for key in _STRING_FIELDS:
        value = raw.get(key)
        if not value or not isinstance(value, str):
            raise RegistryLoadError(
                f"Record at index {index}: '{key}' must be a non-empty string"
            )
    year = raw.get("year")
    if isinstance(year, bool) or not isinstance(year, int):
        raise RegistryLoadError(f"Record at index {index}: 'year' must be an integer")
    return RegistryRecord(
        certificate_number=raw["certificate_number"].upper(),
        fingerprint=raw["fingerprint"].lower(),
        holder_name=raw["holder_name"],
        institution=raw["institution"],
        course=raw["course"],
        year=year,
    )
