class RegistryError(Exception):
    """Base exception for registry data source errors."""


class RegistryLoadError(RegistryError):
    """Raised when a registry mirror file cannot be read or is malformed."""
