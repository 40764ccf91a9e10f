from __future__ import annotations


class AssetIQError(Exception):
    """Base class for every error raised by the AssetIQ engines."""


class InputError(AssetIQError, ValueError):
    """Raised when a caller hands the engine something it cannot interpret."""


class UnknownComponentType(InputError):
    def __init__(self, component_type: str) -> None:
        super().__init__(f"Unknown component type: {component_type!r}")
        self.component_type = component_type


class UnknownChangeType(InputError):
    def __init__(self, change_type: str) -> None:
        super().__init__(f"Unknown change type: {change_type!r}")
        self.change_type = change_type


class MalformedRequest(InputError):
    """Raised when a request payload is missing required fields."""


class ImpactChainError(AssetIQError):
    """Raised when depends_on references are dangling or cyclic."""
