"""State base class that records which public attributes changed"""

from typing import Any, Callable, Generic, TypeVar, overload

T = TypeVar("T")

MISSING = object()


class Field(Generic[T]):
    """Descriptor declaring a tracked state attribute with a default value or factory"""

    def __init__(self, default: T | Callable[[], T]) -> None:
        self._default = default
        self._name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name

    @overload
    def __get__(self, instance: None, owner: type) -> "Field[T]": ...

    @overload
    def __get__(self, instance: "State", owner: type) -> T: ...

    def __get__(self, instance, owner):
        if instance is None:
            return self
        values = instance.__dict__.setdefault("_values", {})
        if self._name not in values:
            default = self._default
            values[self._name] = default() if callable(default) else default
        return values[self._name]

    def __set__(self, instance: "State", value: T) -> None:
        values = instance.__dict__.setdefault("_values", {})
        old_value = values.get(self._name, MISSING)
        values[self._name] = value
        if old_value is MISSING or old_value != value:
            instance._changed(self._name)  # pylint: disable=protected-access


class State:
    """Tracks changes to its public attributes.

    `changes` accumulates the names of attributes assigned a different value until
    `clear_changes` is called, which the main loop does once per frame.
    """

    def __init__(self) -> None:
        self.__dict__["_changes"] = set()

    def __setattr__(self, name: str, value: Any) -> None:
        """Override setattr to track changes to public attributes."""
        if isinstance(getattr(type(self), name, None), Field):
            super().__setattr__(name, value)
            return
        old_value = self.__dict__.get(name, MISSING)
        super().__setattr__(name, value)
        if not name.startswith("_") and old_value != value:
            self._changed(name)

    def _changed(self, name: str) -> None:
        self.__dict__.setdefault("_changes", set()).add(name)

    @property
    def changes(self) -> set[str]:
        """Get the set of attribute names that have changed."""
        return set(self.__dict__.get("_changes", set()))

    def clear_changes(self) -> None:
        """Clear the changes set."""
        self.__dict__.setdefault("_changes", set()).clear()
