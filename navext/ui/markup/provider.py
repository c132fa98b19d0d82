"""
Value-provision context handed to markup extensions.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ProvideValueTarget:
    """The object and property a markup extension is being evaluated for."""
    target_object: Any
    target_property: Optional[str] = None


class ServiceProvider:
    """Type-keyed services available while a markup extension is evaluated."""

    def __init__(self, services: Optional[Dict[type, Any]] = None):
        self._services: Dict[type, Any] = dict(services or {})

    def add_service(self, service_type: type, service: Any) -> None:
        self._services[service_type] = service

    def get_service(self, service_type: type) -> Optional[Any]:
        return self._services.get(service_type)

    @classmethod
    def for_target(cls, target_object: Any, target_property: Optional[str] = None) -> 'ServiceProvider':
        return cls({ProvideValueTarget: ProvideValueTarget(target_object, target_property)})
