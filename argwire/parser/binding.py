# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Bindings connect an `Argument` to the caller-owned value it updates.

An argument never holds a bare reference to the caller's variable. It holds a
`Binding`, which knows the declared type of the destination and how to read
and write it. Three kinds are provided:

- `Placeholder`: a small typed box that owns its value (`placeholder.value`).
- `AttributeBinding`: an attribute on a caller object, such as a dataclass
  instance or an `argparse.Namespace`.
- `ItemBinding`: a key in a caller mapping.

Example:
    verbose = Placeholder(bool)
    options = Options()
    parser.add_argument(Argument("--verbose", verbose), group="default")
    parser.add_argument(Argument("--level", AttributeBinding(options, "level")), group="default")
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, MutableMapping, TypeVar, get_type_hints

from argwire.parser.converter import type_name, zero_value

T = TypeVar("T")

_UNSET: Any = object()


class Binding(ABC):
    """A typed, writable destination for parsed values."""

    target_type: Any

    @abstractmethod
    def get(self) -> Any:
        """Return the current value of the destination."""

    @abstractmethod
    def set(self, value: Any) -> None:
        """Overwrite the destination with `value`."""

    @property
    def is_boolean(self) -> bool:
        return self.target_type is bool


class Placeholder(Binding, Generic[T]):
    """
    A value box owned by the caller.

    Args:
        target_type (type[T]): The declared type of the value.
        value (T): The initial value. Defaults to the type's zero value.
    """

    def __init__(self, target_type: Any = str, value: Any = _UNSET) -> None:
        self.target_type = target_type
        self.value: T = zero_value(target_type) if value is _UNSET else value

    def get(self) -> T:
        return self.value

    def set(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Placeholder[{type_name(self.target_type)}]({self.value!r})"


def _infer_type(current: Any) -> Any:
    if current is None:
        return str
    return type(current)


class AttributeBinding(Binding):
    """
    Writes an attribute of a caller object.

    The target type is taken from `target_type`, then from the object's class
    annotations, then from the type of the attribute's current value, falling
    back to `str`.
    """

    def __init__(self, obj: Any, attribute: str, target_type: Any = None) -> None:
        self.obj = obj
        self.attribute = attribute
        if target_type is None:
            try:
                hints = get_type_hints(type(obj))
            except (NameError, TypeError):
                hints = {}
            target_type = hints.get(attribute) or _infer_type(
                getattr(obj, attribute, None)
            )
        self.target_type = target_type

    def get(self) -> Any:
        return getattr(self.obj, self.attribute, None)

    def set(self, value: Any) -> None:
        setattr(self.obj, self.attribute, value)

    def __repr__(self) -> str:
        return f"AttributeBinding({type(self.obj).__name__}.{self.attribute})"


class ItemBinding(Binding):
    """Writes a key of a caller mapping."""

    def __init__(
        self, mapping: MutableMapping[str, Any], key: str, target_type: Any = None
    ) -> None:
        self.mapping = mapping
        self.key = key
        self.target_type = (
            target_type if target_type is not None else _infer_type(mapping.get(key))
        )

    def get(self) -> Any:
        return self.mapping.get(self.key)

    def set(self, value: Any) -> None:
        self.mapping[self.key] = value

    def __repr__(self) -> str:
        return f"ItemBinding({self.key!r})"
