"""
Behaviors - reusable pieces of logic attached to a single element.

A behavior is attached through an element's ``behaviors`` collection
and only holds a weak reference back to the element it is attached to.

Usage:
    behavior = EventToCommandBehavior("clicked")
    button.behaviors.add(behavior)
    behavior.command = save_command
"""
import weakref
from typing import Any, Iterator, List, Optional
from PySide6.QtCore import QObject
from loguru import logger


class BehaviorBase(QObject):
    """Base class for behaviors. Override ``on_attached`` / ``on_detaching``."""

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._associated_ref: Optional[weakref.ref] = None

    @property
    def associated_object(self) -> Optional[QObject]:
        """The element this behavior is attached to, or None."""
        return self._associated_ref() if self._associated_ref is not None else None

    def attach(self, element: QObject) -> None:
        if self.associated_object is not None:
            raise RuntimeError(f"{type(self).__name__} is already attached to {self.associated_object!r}")
        self._associated_ref = weakref.ref(element)
        self.on_attached(element)

    def detach(self) -> None:
        element = self.associated_object
        self._associated_ref = None
        if element is not None:
            self.on_detaching(element)

    def on_attached(self, element: QObject) -> None:
        pass

    def on_detaching(self, element: QObject) -> None:
        pass


class BehaviorCollection:
    """Behaviors of one element; adding attaches, removing detaches."""

    def __init__(self, owner: QObject):
        self._owner = weakref.ref(owner)
        self._items: List[BehaviorBase] = []

    def add(self, behavior: BehaviorBase) -> None:
        owner = self._owner()
        if owner is None:
            raise RuntimeError("Cannot add a behavior to a destroyed element")
        behavior.attach(owner)
        self._items.append(behavior)

    append = add

    def remove(self, behavior: BehaviorBase) -> bool:
        """Detach and remove ``behavior``. Returns False if it was not in the collection."""
        if behavior not in self._items:
            return False
        self._items.remove(behavior)
        behavior.detach()
        return True

    def __contains__(self, behavior: Any) -> bool:
        return behavior in self._items

    def __iter__(self) -> Iterator[BehaviorBase]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


class EventToCommandBehavior(BehaviorBase):
    """
    Forwards a Qt signal of the associated element to a command.

    The command is invoked with ``command_parameter`` when it is set,
    otherwise with the first signal argument (if any).
    """

    def __init__(self, signal_name: str, command: Any = None, command_parameter: Any = None):
        super().__init__()
        self.signal_name = signal_name
        self.command = command
        self.command_parameter = command_parameter
        self._signal = None

    def on_attached(self, element: QObject) -> None:
        signal = getattr(element, self.signal_name, None)
        if signal is None or not callable(getattr(signal, "connect", None)):
            raise ValueError(f"Signal '{self.signal_name}' not found on {element!r}")
        signal.connect(self._on_event)
        self._signal = signal

    def on_detaching(self, element: QObject) -> None:
        if self._signal is not None:
            try:
                self._signal.disconnect(self._on_event)
            except (RuntimeError, TypeError) as e:
                logger.debug(f"EventToCommandBehavior: disconnect skipped: {e}")
            self._signal = None

    def _on_event(self, *args) -> None:
        command = self.command
        if command is None:
            return
        parameter = self.command_parameter
        if parameter is None and args:
            parameter = args[0]
        if command.can_execute(parameter):
            command.execute(parameter)
