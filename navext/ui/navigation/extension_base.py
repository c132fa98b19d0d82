"""
Navigation command extensions.

NavigationExtensionBase turns a TargetAwareExtension into a UI command:

- ``can_execute`` is ``page is not None and not is_navigating``;
- ``execute`` is fire-and-forget: it marks the command busy, schedules
  the navigation on the running asyncio loop and returns;
- ``canExecuteChanged`` fires after every change of page or busy state.

Subclasses override ``handle_navigation`` only.
"""
import asyncio
from typing import Any, Optional

from PySide6.QtCore import QObject, Signal
from loguru import logger

from navext.ui.markup.converters import to_bool, to_optional_bool
from navext.ui.markup.provider import ServiceProvider
from navext.ui.markup.target_aware import TargetAwareExtension, TargetBindingContext
from navext.ui.mvvm.bindable import BindableProperty
from navext.ui.navigation.parameters import (
    KnownNavigationParameters,
    NavigationParameters,
    to_navigation_parameters,
)
from navext.ui.navigation.service import INavigationService, get_navigation_service


class NavigationExtensionBase(TargetAwareExtension):
    """
    Base class for markup extensions that navigate when invoked.

    Args:
        animated: Forwarded to the navigation service as ``animated``.
        use_modal_navigation: Tri-state; None leaves the choice to the service.
        target_binding_context: ``"Element"`` or ``"Page"``.
    """

    canExecuteChanged = Signal()

    animated = BindableProperty(default=True, coerce=to_bool)
    use_modal_navigation = BindableProperty(default=None, coerce=to_optional_bool)

    def __init__(self, animated: Any = True, use_modal_navigation: Any = None,
                 target_binding_context: Any = TargetBindingContext.ELEMENT,
                 parent: Optional[QObject] = None):
        super().__init__(target_binding_context=target_binding_context, parent=parent)
        self._is_navigating = False
        self._pending_task: Optional[asyncio.Task] = None
        self.animated = animated
        self.use_modal_navigation = use_modal_navigation

    @property
    def is_navigating(self) -> bool:
        """True while one navigation is in flight."""
        return self._is_navigating

    def _set_is_navigating(self, value: bool) -> None:
        if value == self._is_navigating:
            return
        self._is_navigating = value
        self.on_property_changed("is_navigating", value)

    # --- Command contract ---

    def can_execute(self, parameter: Any = None) -> bool:
        return self.page is not None and not self._is_navigating

    def execute(self, parameter: Any = None) -> None:
        """
        Start navigating and return immediately.

        Ignored while not executable. Failures are logged, never raised.
        Without a running event loop the navigation runs to completion
        before this returns.
        """
        parameters = self._begin_navigation(parameter)
        if parameters is None:
            return

        coroutine = self._run_navigation(parameters)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coroutine)
            return

        task = loop.create_task(coroutine)
        self._pending_task = task
        task.add_done_callback(self._on_navigation_done)

    async def execute_async(self, parameter: Any = None) -> None:
        """Awaitable form of ``execute`` with the same guard and error handling."""
        parameters = self._begin_navigation(parameter)
        if parameters is None:
            return
        await self._run_navigation(parameters)

    def raise_can_execute_changed(self) -> None:
        self.canExecuteChanged.emit()

    # --- Execution ---

    def _begin_navigation(self, parameter: Any) -> Optional[NavigationParameters]:
        """Check, build the parameter bag and go busy. Returns None when nothing should run."""
        if not self.can_execute(parameter):
            return None

        try:
            parameters = to_navigation_parameters(parameter, self.target_element)
        except (TypeError, ValueError) as ex:
            self.log(ex, NavigationParameters())
            return None

        self._set_is_navigating(True)
        return parameters

    async def _run_navigation(self, parameters: NavigationParameters) -> None:
        try:
            navigation_service = get_navigation_service(self.page)
            await self.handle_navigation(parameters, navigation_service)
        except Exception as ex:
            self.log(ex, parameters)
        finally:
            self._set_is_navigating(False)

    def _on_navigation_done(self, task: asyncio.Task) -> None:
        if self._pending_task is task:
            self._pending_task = None
        if task.cancelled():
            logger.warning(f"{type(self).__name__}: navigation task was cancelled")

    async def handle_navigation(self, parameters: NavigationParameters,
                                navigation_service: INavigationService) -> None:
        """Perform the navigation. The only method subclasses must override."""
        raise NotImplementedError(f"{type(self).__name__} must override handle_navigation()")

    def add_known_navigation_parameters(self, parameters: NavigationParameters) -> None:
        """Add ``animated`` and (when set) ``useModalNavigation``; caller-supplied values win."""
        parameters.set_default(KnownNavigationParameters.ANIMATED, self.animated)

        if self.use_modal_navigation is not None:
            parameters.set_default(KnownNavigationParameters.USE_MODAL_NAVIGATION, self.use_modal_navigation)

    def log(self, exception: BaseException, parameters: NavigationParameters) -> None:
        """Report a navigation failure at error level."""
        (self.logger or logger).opt(exception=exception).error(
            "Error navigating with parameters: {}", parameters
        )

    # --- Markup ---

    def _provide_value(self, service_provider: ServiceProvider) -> 'NavigationExtensionBase':
        return self

    def on_property_changed(self, property_name: str, value: Any) -> None:
        super().on_property_changed(property_name, value)

        if property_name in ("page", "is_navigating"):
            self.raise_can_execute_changed()
