from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NavigationResult:
    """Outcome of a navigation request. A failure carries the exception instead of raising it."""
    success: bool
    exception: Optional[BaseException] = None

    @classmethod
    def ok(cls) -> 'NavigationResult':
        return cls(success=True)

    @classmethod
    def failed(cls, exception: BaseException) -> 'NavigationResult':
        return cls(success=False, exception=exception)
