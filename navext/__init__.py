"""
navext - declarative navigation commands for PySide6 views.

Markup extensions resolve the widget and page they are applied to,
mirror a binding context and act as async navigation commands.
"""
__version__ = "0.3.0"
