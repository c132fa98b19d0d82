"""
WPF-Style Bindable Objects.

Provides automatic change notification for plain Python attributes on
QObjects, plus per-property binding slots so a property can be fed
from another object's property.

Usage:
    class ProductViewModel(BindableObject):
        titleChanged = Signal(object)
        title = BindableProperty(default="")

    vm.title = "Shoes"                       # emits titleChanged + propertyChanged
    other.set_binding("title", vm, "title")  # other.title follows vm.title
"""
from typing import Any, Callable, Dict, Optional, TypeVar, Generic
from PySide6.QtCore import QObject, Signal

from navext.ui.mvvm.binding import Binding, BindingMode, bind

T = TypeVar('T')


class BindableProperty(Generic[T]):
    """
    Descriptor that notifies its owner when the value changes.

    Args:
        default: Default value for the property.
        signal_name: Specific signal to emit. Defaults to "{property_name}Changed".
        coerce: Callable that converts/validates incoming values (e.g. markup strings).
        identity: Compare old and new values with ``is`` instead of ``==``.

    Notification goes through ``owner.on_property_changed(name, value)``
    so subclasses can react to their own property changes.
    """

    def __init__(
        self,
        default: T = None,
        signal_name: Optional[str] = None,
        coerce: Optional[Callable[[Any], T]] = None,
        identity: bool = False,
    ):
        self.default = default
        self._signal_name = signal_name
        self.coerce = coerce
        self.identity = identity
        self._attr_name: str = ""
        self._public_name: str = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self._public_name = name
        self._attr_name = f"_bindable_{name}"
        if not self._signal_name:
            self._signal_name = f"{name}Changed"

    @property
    def name(self) -> str:
        return self._public_name

    def __get__(self, obj: Optional[QObject], objtype: type = None) -> T:
        if obj is None:
            return self  # type: ignore
        return getattr(obj, self._attr_name, self.default)

    def __set__(self, obj: QObject, value: Any) -> None:
        if self.coerce is not None:
            value = self.coerce(value)

        old_value = getattr(obj, self._attr_name, self.default)
        unchanged = old_value is value if self.identity else old_value == value
        if unchanged:
            return

        setattr(obj, self._attr_name, value)

        specific_signal = getattr(obj, self._signal_name, None)
        if specific_signal is not None and callable(getattr(specific_signal, 'emit', None)):
            specific_signal.emit(value)

        handler = getattr(obj, 'on_property_changed', None)
        if callable(handler):
            handler(self._public_name, value)


class BindableObject(QObject):
    """
    QObject with property change notification and binding slots.

    Provides:
    - ``propertyChanged(name, value)`` for every property change.
    - ``binding_context``: the data object this instance's bindings read from.
    - ``set_binding`` / ``clear_binding``: at most one binding per target property;
      setting a new one detaches the previous one.
    """

    propertyChanged = Signal(str, object)
    bindingContextChanged = Signal(object)

    binding_context = BindableProperty(default=None, signal_name="bindingContextChanged", identity=True)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._bindings: Dict[str, Binding] = {}

    def on_property_changed(self, property_name: str, value: Any) -> None:
        """
        Called after a property value changed.

        Subclasses override to react and must call super() so the
        generic signal still fires.
        """
        self.propertyChanged.emit(property_name, value)

    def set_binding(
        self,
        target_property: str,
        source: QObject,
        source_property: str,
        mode: BindingMode = BindingMode.ONE_WAY,
    ) -> Binding:
        """Bind ``target_property`` on self to ``source.source_property``, replacing any prior binding."""
        self.clear_binding(target_property)
        binding = bind(source, source_property, self, target_property, mode=mode)
        self._bindings[target_property] = binding
        return binding

    def clear_binding(self, target_property: str) -> None:
        binding = self._bindings.pop(target_property, None)
        if binding is not None:
            binding.detach()

    def get_binding(self, target_property: str) -> Optional[Binding]:
        return self._bindings.get(target_property)
