"""
Markup extension base and the evaluation entry point.

Usage:
    button = Button("Details", parent=page)
    apply_extension(button, "command", NavigateToExtension("Details"))
"""
from typing import Any

from loguru import logger

from navext.ui.markup.provider import ServiceProvider


class MarkupExtension:
    """An object evaluated against a target property that provides the value to assign."""

    def provide_value(self, service_provider: ServiceProvider) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must override provide_value()")


def apply_extension(target: Any, property_name: str, extension: MarkupExtension) -> Any:
    """
    Evaluate ``extension`` for ``target.property_name`` and assign the result,
    as a markup loader does for a declared attribute.

    Configuration errors raised by the extension propagate unchanged.
    """
    value = extension.provide_value(ServiceProvider.for_target(target, property_name))
    setattr(target, property_name, value)
    logger.debug(f"Applied {type(extension).__name__} to {type(target).__name__}.{property_name}")
    return value
