"""
MVVM Package - WPF-Style Data Binding for PySide6.

Provides:
- BindableProperty: Descriptor for auto-notifying properties.
- BindableObject: QObject with propertyChanged, binding_context and binding slots.
- bind(): Property binding between objects, returning a detachable Binding.
- bind_command(): Command binding between a command and a widget signal.
"""
from navext.ui.mvvm.binding import bind, bind_command, Binding, BindingMode, CommandBinding
from navext.ui.mvvm.bindable import BindableObject, BindableProperty

__all__ = [
    "BindableObject",
    "BindableProperty",
    "bind",
    "bind_command",
    "Binding",
    "BindingMode",
    "CommandBinding",
]
