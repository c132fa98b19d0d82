"""
Markup extensions: evaluation context, errors and the target-aware base.
"""
from navext.ui.markup.errors import (
    ExtensionAlreadyAppliedError,
    MarkupConfigurationError,
    MissingProvideValueTargetError,
    UnsupportedTargetError,
)
from navext.ui.markup.extension import MarkupExtension, apply_extension
from navext.ui.markup.provider import ProvideValueTarget, ServiceProvider
from navext.ui.markup.target_aware import TargetAwareExtension, TargetBindingContext

__all__ = [
    "ExtensionAlreadyAppliedError",
    "MarkupConfigurationError",
    "MissingProvideValueTargetError",
    "UnsupportedTargetError",
    "MarkupExtension",
    "apply_extension",
    "ProvideValueTarget",
    "ServiceProvider",
    "TargetAwareExtension",
    "TargetBindingContext",
]
