from enum import Enum
from typing import Any

from loguru import logger

from navext.ui.mvvm.bindable import BindableProperty
from navext.ui.markup.converters import parse_enum
from navext.ui.navigation.extension_base import NavigationExtensionBase
from navext.ui.navigation.parameters import NavigationParameters
from navext.ui.navigation.service import INavigationService


class GoBackType(Enum):
    """How far back a GoBackExtension navigates."""
    DEFAULT = 0   # previous page
    TO_ROOT = 1   # root of the current stack

    @classmethod
    def parse(cls, value: Any) -> 'GoBackType':
        return parse_enum(cls, value)


class GoBackExtension(NavigationExtensionBase):
    """Navigates back from the page the element is on."""

    go_back_type = BindableProperty(default=GoBackType.DEFAULT, coerce=GoBackType.parse)

    def __init__(self, go_back_type: Any = GoBackType.DEFAULT, **kwargs):
        super().__init__(**kwargs)
        self.go_back_type = go_back_type

    async def handle_navigation(self, parameters: NavigationParameters,
                                navigation_service: INavigationService) -> None:
        self.add_known_navigation_parameters(parameters)

        if self.go_back_type == GoBackType.TO_ROOT:
            result = await navigation_service.go_back_to_root_async(parameters)
        else:
            result = await navigation_service.go_back_async(parameters)

        if result.exception is not None:
            self.log(result.exception, parameters)

    def log(self, exception: BaseException, parameters: NavigationParameters) -> None:
        (self.logger or logger).opt(exception=exception).error(
            "Go back ({}) failed with parameters: {}", self.go_back_type.name, parameters
        )
