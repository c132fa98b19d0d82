"""
Target-aware markup extensions.

A TargetAwareExtension knows the element it was applied to and the page
that element lives on. The page is frequently unknown while markup is
being evaluated (templated or nested content is built before it is
inserted into a page), so resolution may complete later through a
one-shot attachment listener.

Once resolved, the extension's own ``binding_context`` mirrors either
the element's or the page's binding context, so properties of the
extension can be bound against the same view model as the element.
"""
import weakref
from enum import Enum
from typing import Any, Optional

from PySide6.QtCore import QObject
from loguru import logger

from navext.core.container import ContainerProvider, get_container_provider
from navext.core.logging import LoggerFactory
from navext.ui.behaviors import BehaviorBase
from navext.ui.elements import BindableElement, ElementParentedCallbackBehavior, Page, find_parent_page
from navext.ui.markup.converters import parse_enum
from navext.ui.markup.errors import (
    ExtensionAlreadyAppliedError,
    MissingProvideValueTargetError,
    UnsupportedTargetError,
)
from navext.ui.markup.extension import MarkupExtension
from navext.ui.markup.provider import ProvideValueTarget, ServiceProvider
from navext.ui.mvvm.bindable import BindableObject, BindableProperty
from navext.ui.mvvm.binding import BindingMode


class TargetBindingContext(Enum):
    """Where an extension takes its binding context from."""
    ELEMENT = "Element"
    PAGE = "Page"

    @classmethod
    def parse(cls, value: Any) -> 'TargetBindingContext':
        return parse_enum(cls, value)


class TargetAwareExtension(MarkupExtension, BindableObject):
    """
    Base class for extensions that need their target element and page.

    Subclasses implement ``_provide_value``. ``target_element`` and
    ``page`` are weak references: the extension never keeps either alive.
    """

    target_binding_context = BindableProperty(
        default=TargetBindingContext.ELEMENT,
        coerce=TargetBindingContext.parse,
    )

    def __init__(self, target_binding_context: Any = TargetBindingContext.ELEMENT,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._target_ref: Optional[weakref.ref] = None
        self._page_ref: Optional[weakref.ref] = None
        self._logger = None
        self._logger_factory_missing = False
        self.target_binding_context = target_binding_context

    # --- Resolved context ---

    @property
    def target_element(self) -> Optional[BindableElement]:
        return self._target_ref() if self._target_ref is not None else None

    @target_element.setter
    def target_element(self, element: Optional[BindableElement]) -> None:
        if element is self.target_element:
            return
        self._target_ref = weakref.ref(element) if element is not None else None
        self.on_property_changed("target_element", element)

    @property
    def page(self) -> Optional[Page]:
        return self._page_ref() if self._page_ref is not None else None

    @page.setter
    def page(self, page: Optional[Page]) -> None:
        if page is self.page:
            return
        self._page_ref = weakref.ref(page) if page is not None else None
        self.on_property_changed("page", page)

    @property
    def container(self) -> Optional[ContainerProvider]:
        """Container scope of the target element."""
        return get_container_provider(self.target_element)

    @property
    def logger(self):
        """Logger from the page's scope; None until the page is known."""
        if self._logger is None and not self._logger_factory_missing:
            self._logger = self._create_logger()
        return self._logger

    def _create_logger(self):
        page = self.page
        if page is None:
            return None

        container = get_container_provider(page)
        factory = container.try_resolve(LoggerFactory) if container is not None else None
        if factory is None:
            self._logger_factory_missing = True
            logger.warning(f"{type(self).__name__}: no LoggerFactory in the scope of {page!r}")
            return None
        return factory.create_logger(type(self).__name__)

    # --- Markup evaluation ---

    def provide_value(self, service_provider: ServiceProvider) -> Any:
        """
        Resolve the target element and its page, then provide the value.

        Raises:
            MissingProvideValueTargetError: The provider has no ProvideValueTarget.
            UnsupportedTargetError: The target is neither an element nor a behavior attached to one.
            ExtensionAlreadyAppliedError: This instance was already applied to another element.
        """
        value_target = service_provider.get_service(ProvideValueTarget)
        if value_target is None:
            raise MissingProvideValueTargetError(
                f"{type(self).__name__} requires a ProvideValueTarget service"
            )

        element = self._resolve_element(value_target.target_object)
        if element is None:
            raise UnsupportedTargetError(f"{value_target.target_object!r} is not supported")

        current = self.target_element
        if current is not None:
            if current is not element:
                raise ExtensionAlreadyAppliedError(
                    f"{type(self).__name__} is already applied to {current!r}"
                )
            return self._provide_value(service_provider)

        self.target_element = element

        page = find_parent_page(element)
        if page is not None:
            self.page = page
        else:
            element.behaviors.add(ElementParentedCallbackBehavior(self._on_element_parented))

        return self._provide_value(service_provider)

    def _provide_value(self, service_provider: ServiceProvider) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must override _provide_value()")

    @staticmethod
    def _resolve_element(target_object: Any) -> Optional[BindableElement]:
        if isinstance(target_object, BindableElement):
            return target_object

        # Applied to a behavior's property (e.g. EventToCommandBehavior.command)
        if isinstance(target_object, BehaviorBase):
            associated = target_object.associated_object
            if isinstance(associated, BindableElement):
                return associated

        return None

    def _on_element_parented(self) -> None:
        element = self.target_element
        if element is not None:
            self.page = find_parent_page(element)

    # --- Binding context ---

    def on_property_changed(self, property_name: str, value: Any) -> None:
        super().on_property_changed(property_name, value)

        if property_name in ("target_element", "page"):
            self._sync_binding_context()

    def _sync_binding_context(self) -> None:
        if self.target_binding_context == TargetBindingContext.ELEMENT:
            source = self.target_element
        else:
            source = self.page

        # No source yet: keep whatever binding is in place
        if source is not None:
            self.set_binding("binding_context", source, "binding_context", mode=BindingMode.ONE_WAY)
