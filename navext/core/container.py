"""
Container scopes.

A ContainerProvider is a registry of services keyed by type. Scopes are
created per page and fall back to their parent for anything they do not
register themselves, so page-specific services (a page's navigation
service) shadow application-wide ones (config, logger factory).
"""
from typing import Any, Callable, Dict, Optional, Type, TypeVar
from loguru import logger

T = TypeVar('T')


class ContainerProvider:
    """
    Registry of services with parent-scope fallback.

    Example:
        root = ContainerProvider()
        root.register_instance(LoggerFactory, LoggerFactory())

        page_scope = root.create_scope("DetailsPage")
        page_scope.register_instance(INavigationService, service)

        page_scope.resolve(LoggerFactory)  # found in root
    """

    def __init__(self, parent: Optional['ContainerProvider'] = None, name: str = "root"):
        self.parent = parent
        self.name = name
        self._instances: Dict[type, Any] = {}
        self._factories: Dict[type, Callable[['ContainerProvider'], Any]] = {}

    def register_instance(self, service_type: Type[T], instance: T) -> T:
        """Register a ready-made instance for ``service_type`` in this scope."""
        self._instances[service_type] = instance
        logger.debug(f"[{self.name}] Registered instance for {service_type.__name__}")
        return instance

    def register_factory(self, service_type: Type[T], factory: Callable[['ContainerProvider'], T]) -> None:
        """
        Register a lazy factory. The factory receives the scope that
        resolved it and its result is cached in that scope.
        """
        self._factories[service_type] = factory
        logger.debug(f"[{self.name}] Registered factory for {service_type.__name__}")

    def is_registered(self, service_type: type) -> bool:
        if service_type in self._instances or service_type in self._factories:
            return True
        return self.parent is not None and self.parent.is_registered(service_type)

    def resolve(self, service_type: Type[T]) -> T:
        """
        Resolve a service from this scope or its ancestors.

        Raises:
            KeyError: If no scope in the chain registers ``service_type``.
        """
        if service_type in self._instances:
            return self._instances[service_type]

        if service_type in self._factories:
            instance = self._factories[service_type](self)
            self._instances[service_type] = instance
            return instance

        if self.parent is not None:
            return self.parent.resolve(service_type)

        raise KeyError(f"Service {service_type.__name__} not registered.")

    def try_resolve(self, service_type: Type[T]) -> Optional[T]:
        try:
            return self.resolve(service_type)
        except KeyError:
            return None

    def create_scope(self, name: str = "scope") -> 'ContainerProvider':
        """Create a child scope that falls back to this one."""
        return ContainerProvider(parent=self, name=name)

    def __repr__(self) -> str:
        return f"ContainerProvider({self.name!r})"


def get_container_provider(obj) -> Optional[ContainerProvider]:
    """
    Find the container scope governing a widget.

    Walks from ``obj`` up the parent chain and returns the first
    non-null ``container`` attribute (pages carry one).
    """
    current = obj
    while current is not None:
        container = getattr(current, "container", None)
        if isinstance(container, ContainerProvider):
            return container
        parent_widget = getattr(current, "parentWidget", None)
        current = parent_widget() if callable(parent_widget) else None
    return None
