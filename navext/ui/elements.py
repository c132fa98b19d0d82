"""
Bindable UI elements and page lookup.

``BindableElement`` adds WPF-style DataContext semantics to QWidget
subclasses: a ``binding_context`` that is either set explicitly or
inherited from the nearest ancestor element, with a change signal that
fires whenever the effective value changes (explicit set, ancestor set,
or re-parenting).

Usage:
    page = Page(container=scope)
    page.binding_context = DetailsViewModel()

    button = Button("Open", parent=page)
    button.binding_context  # -> the page's view model
"""
import weakref
from typing import Any, Callable, List, Optional

from PySide6.QtCore import QEvent, QObject, Signal
from PySide6.QtWidgets import QPushButton, QWidget
from loguru import logger

from navext.core.container import ContainerProvider
from navext.ui.behaviors import BehaviorBase, BehaviorCollection
from navext.ui.mvvm.binding import CommandBinding, bind_command

_UNSET = object()


class _ElementNotifier(QObject):
    """Carries the element's signals; the mixin itself is not a QObject."""
    bindingContextChanged = Signal(object)


class BindableElement:
    """
    Mixin for QWidget subclasses. Must come before the Qt base class:

        class Card(BindableElement, QFrame): ...

    State is created lazily so the mixin needs no ``__init__``.
    """

    _local_binding_context: Any = _UNSET
    _effective_binding_context: Any = _UNSET
    _local_navigation_parameters: Any = None
    _element_notifier: Optional[_ElementNotifier] = None
    _element_behaviors: Optional[BehaviorCollection] = None

    # --- Binding context ---

    @property
    def bindingContextChanged(self):
        if self._element_notifier is None:
            self._element_notifier = _ElementNotifier()
            # Change detection starts from what the first subscriber sees
            self._effective_binding_context = self.binding_context
        return self._element_notifier.bindingContextChanged

    @property
    def binding_context(self) -> Any:
        if self._local_binding_context is not _UNSET:
            return self._local_binding_context
        parent = self.parent_element()
        return parent.binding_context if parent is not None else None

    @binding_context.setter
    def binding_context(self, value: Any) -> None:
        self._local_binding_context = value
        self._refresh_binding_context()

    def clear_binding_context(self) -> None:
        """Drop the explicit value and inherit from the parent again."""
        self._local_binding_context = _UNSET
        self._refresh_binding_context()

    def _refresh_binding_context(self) -> None:
        self._update_effective_binding_context()
        for child in self.findChildren(QWidget):
            if isinstance(child, BindableElement):
                child._update_effective_binding_context()

    def _update_effective_binding_context(self) -> None:
        value = self.binding_context
        if value is self._effective_binding_context:
            return
        if self._element_notifier is None:
            # Nobody listens yet
            return
        self._effective_binding_context = value
        self.bindingContextChanged.emit(value)

    # --- Tree ---

    def parent_element(self) -> Optional['BindableElement']:
        """Nearest ancestor that is a BindableElement (plain widgets are skipped)."""
        parent = self.parentWidget()
        while parent is not None and not isinstance(parent, BindableElement):
            parent = parent.parentWidget()
        return parent

    def event(self, event: QEvent) -> bool:
        if event.type() == QEvent.Type.ParentChange:
            self._refresh_binding_context()
        return super().event(event)

    # --- Behaviors ---

    @property
    def behaviors(self) -> BehaviorCollection:
        if self._element_behaviors is None:
            self._element_behaviors = BehaviorCollection(self)
        return self._element_behaviors

    # --- Navigation parameters ---

    @property
    def navigation_parameters(self) -> Any:
        """Parameters every navigation started from this element carries; inherited like the binding context."""
        if self._local_navigation_parameters is not None:
            return self._local_navigation_parameters
        parent = self.parent_element()
        return parent.navigation_parameters if parent is not None else None

    @navigation_parameters.setter
    def navigation_parameters(self, value: Any) -> None:
        self._local_navigation_parameters = value


class Element(BindableElement, QWidget):
    """Plain bindable container widget."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)


class Page(BindableElement, QWidget):
    """
    Navigation root for a view.

    Pages own the container scope that the elements on them resolve
    services (navigation service, logger factory) from.
    """

    def __init__(self, parent: Optional[QWidget] = None, container: Optional[ContainerProvider] = None,
                 title: str = ""):
        super().__init__(parent)
        self.container = container
        self.title = title

    def __repr__(self) -> str:
        return f"<Page {self.title or type(self).__name__}>"


class Button(BindableElement, QPushButton):
    """
    Push button that invokes a command on click.

    The button is enabled exactly when ``command.can_execute(command_parameter)``.
    """

    def __init__(self, text: str = "", parent: Optional[QWidget] = None):
        super().__init__(text, parent)
        self._command = None
        self._command_binding: Optional[CommandBinding] = None
        self.command_parameter: Any = None

    @property
    def command(self):
        return self._command

    @command.setter
    def command(self, command) -> None:
        if self._command_binding is not None:
            self._command_binding.detach()
            self._command_binding = None
        self._command = command
        if command is not None:
            self._command_binding = bind_command(command, self, "clicked",
                                                 parameter=lambda: self.command_parameter)
        else:
            self.setEnabled(True)


def find_parent_page(element: Optional[QWidget]) -> Optional[Page]:
    """
    Return the page containing ``element`` (the element itself if it is a
    page), or None if it is not attached to one yet.
    """
    current = element
    while current is not None:
        if isinstance(current, Page):
            return current
        current = current.parentWidget()
    return None


def _lineage(widget: QWidget) -> List[QWidget]:
    """``widget`` followed by all of its ancestors."""
    chain = []
    while widget is not None:
        chain.append(widget)
        widget = widget.parentWidget()
    return chain


class ElementParentedCallbackBehavior(BehaviorBase):
    """
    One-shot attachment listener.

    Invokes ``callback()`` exactly once, when the associated element
    becomes part of a page hierarchy, then removes itself from the
    element's behaviors. The element may be attached directly or through
    any of its ancestors: while no page is found the behavior watches the
    element and every widget above it, and re-arms on each parent change.
    """

    def __init__(self, callback: Callable[[], None]):
        super().__init__()
        self._callback = callback
        self._fired = False
        self._watched: List[weakref.ref] = []

    @property
    def fired(self) -> bool:
        return self._fired

    def on_attached(self, element: QObject) -> None:
        self._watch(_lineage(element))

    def on_detaching(self, element: QObject) -> None:
        self._unwatch()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.Type.ParentChange:
            self._on_parent_changed()
        return False

    def _on_parent_changed(self) -> None:
        element = self.associated_object
        if element is None or self._fired:
            return

        if find_parent_page(element) is None:
            # Still off-page; the chain above the element may have changed
            self._watch(_lineage(element))
            return

        self._fired = True
        element.behaviors.remove(self)
        logger.debug(f"{type(element).__name__} attached to a page")
        self._callback()

    def _watch(self, widgets: List[QWidget]) -> None:
        self._unwatch()
        for widget in widgets:
            widget.installEventFilter(self)
            self._watched.append(weakref.ref(widget))

    def _unwatch(self) -> None:
        for ref in self._watched:
            widget = ref()
            if widget is not None:
                widget.removeEventFilter(self)
        self._watched = []

    @property
    def watched_count(self) -> int:
        """Number of live widgets currently observed."""
        return sum(1 for ref in self._watched if ref() is not None)
