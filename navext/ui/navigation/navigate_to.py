from typing import Any

from loguru import logger

from navext.ui.mvvm.bindable import BindableProperty
from navext.ui.markup.converters import to_optional_str
from navext.ui.navigation.extension_base import NavigationExtensionBase
from navext.ui.navigation.parameters import NavigationParameters
from navext.ui.navigation.service import INavigationService


class NavigateToExtension(NavigationExtensionBase):
    """
    Navigates to the page registered under ``name``.

    Example:
        apply_extension(button, "command", NavigateToExtension("ProductDetails", animated=False))
    """

    name = BindableProperty(default=None, coerce=to_optional_str)

    def __init__(self, name: Any = None, **kwargs):
        super().__init__(**kwargs)
        self.name = name

    async def handle_navigation(self, parameters: NavigationParameters,
                                navigation_service: INavigationService) -> None:
        if not self.name:
            raise ValueError(f"{type(self).__name__} has no target name")

        self.add_known_navigation_parameters(parameters)

        result = await navigation_service.navigate_async(self.name, parameters)
        if result.exception is not None:
            self.log(result.exception, parameters)

    def log(self, exception: BaseException, parameters: NavigationParameters) -> None:
        (self.logger or logger).opt(exception=exception).error(
            "Navigation to {} failed with parameters: {}", self.name, parameters
        )
