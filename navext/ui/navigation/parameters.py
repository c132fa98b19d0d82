"""
Navigation parameter bag.

An ordered key/value collection passed to the navigation service.
Keys may repeat; lookups return the first value for a key.
"""
from typing import Any, Iterator, List, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode


class KnownNavigationParameters:
    """Parameter keys the navigation service interprets itself."""
    ANIMATED = "animated"
    USE_MODAL_NAVIGATION = "useModalNavigation"
    # Raw command parameter that is neither a mapping nor a query string
    XAML_PARAM = "__xaml_param"


class NavigationParameters:
    """
    Ordered, multi-valued parameter bag.

    Example:
        params = NavigationParameters("id=42&tab=reviews")
        params.add("animated", True)
        params["id"]           # "42"
        params.get("missing")  # None
    """

    def __init__(self, source: Union[None, str, Mapping[str, Any], 'NavigationParameters'] = None):
        self._entries: List[Tuple[str, Any]] = []
        if source is None:
            return
        if isinstance(source, str):
            self._entries.extend(parse_qsl(source.lstrip("?"), keep_blank_values=True))
        elif isinstance(source, NavigationParameters):
            self._entries.extend(source._entries)
        elif isinstance(source, Mapping):
            self._entries.extend(source.items())
        else:
            raise TypeError(f"Cannot build NavigationParameters from {type(source).__name__}")

    def add(self, key: str, value: Any) -> None:
        self._entries.append((key, value))

    def set_default(self, key: str, value: Any) -> None:
        """Add ``key`` only if it is not present yet."""
        if key not in self:
            self.add(key, value)

    def update(self, other: Union[Mapping[str, Any], 'NavigationParameters']) -> None:
        """Append every entry of ``other`` (existing keys are not replaced)."""
        items = other.items() if isinstance(other, (Mapping, NavigationParameters)) else other
        for key, value in items:
            self.add(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        for entry_key, value in self._entries:
            if entry_key == key:
                return value
        return default

    def get_values(self, key: str) -> List[Any]:
        return [value for entry_key, value in self._entries if entry_key == key]

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._entries)

    def keys(self) -> List[str]:
        seen = []
        for key, _ in self._entries:
            if key not in seen:
                seen.append(key)
        return seen

    def to_query_string(self) -> str:
        return urlencode(self._entries)

    def __getitem__(self, key: str) -> Any:
        for entry_key, value in self._entries:
            if entry_key == key:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return any(entry_key == key for entry_key, _ in self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NavigationParameters):
            return self._entries == other._entries
        if isinstance(other, Mapping):
            return len(self._entries) == len(other) and all(
                key in other and other[key] == value for key, value in self._entries
            )
        return NotImplemented

    def __str__(self) -> str:
        return ", ".join(f"{key}={value!r}" for key, value in self._entries) or "<empty>"

    def __repr__(self) -> str:
        return f"NavigationParameters({self._entries!r})"


def to_navigation_parameters(parameter: Any, element: Optional[Any] = None) -> NavigationParameters:
    """
    Build the parameter bag for one command invocation.

    Entries attached to ``element`` (``element.navigation_parameters``,
    inherited from ancestors) come first, then the raw command parameter:
    a mapping or bag is merged, a string is parsed as a query string and
    any other non-null object is stored under ``KnownNavigationParameters.XAML_PARAM``.
    """
    parameters = NavigationParameters()

    attached = getattr(element, "navigation_parameters", None) if element is not None else None
    if attached is not None:
        parameters.update(NavigationParameters(attached))

    if parameter is None:
        return parameters

    if isinstance(parameter, (Mapping, NavigationParameters, str)):
        parameters.update(NavigationParameters(parameter))
    else:
        parameters.add(KnownNavigationParameters.XAML_PARAM, parameter)

    return parameters
