from pathlib import Path

from certverify.config.settings import Settings
from certverify.logging.logger import Log
from certverify.registry.base import BaseRegistry
from certverify.registry.in_memory import InMemoryRegistry
from certverify.registry.loader import load_registry_records


class RegistryFactory:
    """Creates the local registry mirror used by the offline matcher."""

    @classmethod
    def create(cls, settings: Settings) -> BaseRegistry:
        path = Path(settings.registry_path) if settings.registry_path.strip() else None
        records = load_registry_records(path)
        Log.info(f"Loaded {len(records)} registry records from {path or 'bundled mirror'}")
        return InMemoryRegistry(records)
