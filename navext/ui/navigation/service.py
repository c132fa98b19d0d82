"""
Navigation Service contract.

The page-stack implementation lives outside navext; commands only need
this interface and resolve the implementation from the container scope
of the page they are on.
"""
from abc import ABC, abstractmethod
from typing import Optional

from navext.core.container import get_container_provider
from navext.ui.navigation.parameters import NavigationParameters
from navext.ui.navigation.result import NavigationResult


class INavigationService(ABC):
    """
    Performs page-stack transitions.

    Implementations report failures through ``NavigationResult.exception``
    rather than raising.
    """

    @abstractmethod
    async def navigate_async(self, name: str, parameters: Optional[NavigationParameters] = None) -> NavigationResult:
        """Navigate to the page registered under ``name``."""

    @abstractmethod
    async def go_back_async(self, parameters: Optional[NavigationParameters] = None) -> NavigationResult:
        """Pop the current page."""

    @abstractmethod
    async def go_back_to_root_async(self, parameters: Optional[NavigationParameters] = None) -> NavigationResult:
        """Pop every page above the root of the current stack."""


def get_navigation_service(page) -> INavigationService:
    """
    Resolve the navigation service for ``page`` from its container scope.

    Raises:
        LookupError: If the page has no container scope.
        KeyError: If the scope does not provide INavigationService.
    """
    container = get_container_provider(page)
    if container is None:
        raise LookupError(f"{page!r} has no container scope")
    return container.resolve(INavigationService)
