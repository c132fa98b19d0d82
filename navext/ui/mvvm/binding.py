"""
WPF-Style Data Binding Utilities.

Provides declarative binding between object properties and command
binding between commands and widgets.

Usage:
    from navext.ui.mvvm.binding import bind, bind_command, BindingMode

    # One-way binding (source -> target)
    binding = bind(element, "binding_context", extension, "binding_context")
    binding.detach()

    # Command binding (button click -> command.execute, enabled <- can_execute)
    bind_command(command, button)
"""
import weakref
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple
from PySide6.QtCore import QObject
from loguru import logger


class BindingMode(Enum):
    """Binding direction modes, inspired by WPF."""
    ONE_WAY = "OneWay"           # Source -> Target
    TWO_WAY = "TwoWay"           # Source <-> Target
    ONE_WAY_TO_SOURCE = "OneWayToSource"  # Target -> Source
    ONE_TIME = "OneTime"         # Initial sync only


def _weak(obj: Any) -> Callable[[], Any]:
    """Weak handle to obj when it supports weak references, a plain closure otherwise."""
    try:
        return weakref.ref(obj)
    except TypeError:
        return lambda: obj


def _change_signal(obj: Any, prop_name: str):
    """Return the change signal for a property, or None."""
    for signal_name in (f"{prop_name}Changed", _camel(prop_name) + "Changed"):
        signal = getattr(obj, signal_name, None)
        if signal is not None and callable(getattr(signal, "connect", None)):
            return signal
    return None


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _setter(obj: Any, prop_name: str) -> Callable[[Any], None]:
    """Qt-style ``setFoo`` when present, attribute assignment otherwise."""
    camel = _camel(prop_name)
    qt_setter = getattr(obj, f"set{camel[:1].upper()}{camel[1:]}", None)
    if callable(qt_setter):
        return qt_setter
    return lambda value: setattr(obj, prop_name, value)


class Binding:
    """
    Handle for a live binding. ``detach()`` disconnects it; detaching
    twice is harmless. The source is held weakly.
    """

    def __init__(self, source: Any, source_property: str, target: Any, target_property: str, mode: BindingMode):
        self._source = _weak(source)
        self.source_property = source_property
        self.target = target
        self.target_property = target_property
        self.mode = mode
        self._connections: List[Tuple[Any, Callable]] = []

    @property
    def source(self) -> Any:
        return self._source()

    @property
    def is_attached(self) -> bool:
        return bool(self._connections)

    def _connect(self, signal, slot: Callable) -> None:
        signal.connect(slot)
        self._connections.append((signal, slot))

    def detach(self) -> None:
        for signal, slot in self._connections:
            try:
                signal.disconnect(slot)
            except (RuntimeError, TypeError) as e:
                # Source already destroyed on the C++ side
                logger.debug(f"Binding detach skipped for {self.source_property}: {e}")
        self._connections.clear()

    def __repr__(self) -> str:
        return (f"Binding({type(self.source).__name__}.{self.source_property} -> "
                f"{type(self.target).__name__}.{self.target_property}, {self.mode.value})")


def bind(
    source: QObject,
    source_property: str,
    target: QObject,
    target_property: str,
    mode: BindingMode = BindingMode.ONE_WAY,
    converter: Optional[Callable[[Any], Any]] = None,
    converter_back: Optional[Callable[[Any], Any]] = None
) -> Binding:
    """
    Bind ``target.target_property`` to ``source.source_property``.

    Args:
        source: Object exposing the property and a ``{property}Changed`` signal.
        source_property: Property name on source (e.g. "binding_context").
        target: Object receiving values.
        target_property: Property name on target.
        mode: Binding direction mode.
        converter: Optional function to convert source value to target value.
        converter_back: Optional function to convert target value back to source.

    Returns:
        The Binding handle.
    """
    binding = Binding(source, source_property, target, target_property, mode)

    source_signal = _change_signal(source, source_property)
    target_signal = _change_signal(target, target_property)
    target_setter = _setter(target, target_property)

    source_ref = _weak(source)

    # Flag to prevent infinite loops in two-way binding
    _updating = [False]

    if mode in (BindingMode.ONE_WAY, BindingMode.TWO_WAY, BindingMode.ONE_TIME):
        def update_target(*args):
            if _updating[0]:
                return
            _updating[0] = True
            try:
                current_source = source_ref()
                if current_source is None:
                    return
                value = getattr(current_source, source_property, None)
                if converter:
                    value = converter(value)
                target_setter(value)
            finally:
                _updating[0] = False

        # Initial sync
        update_target()

        if mode != BindingMode.ONE_TIME and source_signal is not None:
            binding._connect(source_signal, update_target)

    if mode in (BindingMode.TWO_WAY, BindingMode.ONE_WAY_TO_SOURCE):
        if target_signal is not None:
            def update_source(*args):
                if _updating[0]:
                    return
                _updating[0] = True
                try:
                    value = getattr(target, target_property, None)
                    if converter_back:
                        value = converter_back(value)
                    current_source = source_ref()
                    if current_source is not None:
                        setattr(current_source, source_property, value)
                finally:
                    _updating[0] = False

            binding._connect(target_signal, update_source)

    return binding


class CommandBinding:
    """Handle returned by bind_command(); ``detach()`` unhooks trigger and enabled-state sync."""

    def __init__(self, command: Any, trigger: QObject):
        self.command = command
        self.trigger = trigger
        self._connections: List[Tuple[Any, Callable]] = []

    def _connect(self, signal, slot: Callable) -> None:
        signal.connect(slot)
        self._connections.append((signal, slot))

    def detach(self) -> None:
        for signal, slot in self._connections:
            try:
                signal.disconnect(slot)
            except (RuntimeError, TypeError) as e:
                logger.debug(f"Command binding detach skipped: {e}")
        self._connections.clear()


def bind_command(
    command: Any,
    trigger: QObject,
    trigger_signal: str = "clicked",
    parameter: Optional[Callable[[], Any]] = None,
) -> CommandBinding:
    """
    Bind a command (``can_execute``/``execute``/``canExecuteChanged``) to a widget signal.

    The trigger's enabled state follows ``can_execute`` when the trigger
    has ``setEnabled``.

    Args:
        command: Command object.
        trigger: Widget that triggers the command (e.g., QPushButton).
        trigger_signal: Signal name on widget (default: "clicked").
        parameter: Callable returning the command parameter at trigger time.

    Example:
        bind_command(navigate_cmd, self.details_button, parameter=lambda: {"id": 42})
    """
    signal = getattr(trigger, trigger_signal, None)
    if signal is None:
        raise ValueError(f"Signal '{trigger_signal}' not found on {trigger}")

    binding = CommandBinding(command, trigger)
    get_parameter = parameter or (lambda: None)

    def invoke(*args):
        value = get_parameter()
        if command.can_execute(value):
            command.execute(value)

    binding._connect(signal, invoke)

    set_enabled = getattr(trigger, "setEnabled", None)
    if callable(set_enabled):
        def sync_enabled(*args):
            set_enabled(command.can_execute(get_parameter()))

        sync_enabled()
        changed = getattr(command, "canExecuteChanged", None)
        if changed is not None:
            binding._connect(changed, sync_enabled)

    return binding
