"""
Navigation: parameter bag, results, service contract and the
navigation command markup extensions.
"""
from navext.ui.navigation.parameters import (
    KnownNavigationParameters,
    NavigationParameters,
    to_navigation_parameters,
)
from navext.ui.navigation.result import NavigationResult
from navext.ui.navigation.service import INavigationService, get_navigation_service
from navext.ui.navigation.extension_base import NavigationExtensionBase
from navext.ui.navigation.navigate_to import NavigateToExtension
from navext.ui.navigation.go_back import GoBackExtension, GoBackType

__all__ = [
    "KnownNavigationParameters",
    "NavigationParameters",
    "to_navigation_parameters",
    "NavigationResult",
    "INavigationService",
    "get_navigation_service",
    "NavigationExtensionBase",
    "NavigateToExtension",
    "GoBackExtension",
    "GoBackType",
]
