class MarkupConfigurationError(Exception):
    """An extension was declared somewhere it cannot work. Raised while the markup is evaluated."""


class MissingProvideValueTargetError(MarkupConfigurationError, ValueError):
    pass


class UnsupportedTargetError(MarkupConfigurationError, TypeError):
    pass


class ExtensionAlreadyAppliedError(MarkupConfigurationError):
    pass
