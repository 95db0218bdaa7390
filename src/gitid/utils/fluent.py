"""Fluent builder base class for method chaining."""

from typing import Generic, TypeVar

T = TypeVar("T")


class FluentBuilder(Generic[T]):
    """
    Base class for fluent builders that return self for method chaining.

    Example usage:
        class Config(FluentBuilder["Config"]):
            def prefix(self, value: str) -> "Config":
                self._check_not_built()
                self._data.prefix = value
                return self
    """

    def __init__(self) -> None:
        self._built = False

    def _check_not_built(self) -> None:
        """Raise an error if build() has already been called."""
        if self._built:
            raise RuntimeError("Builder has already been used to build an object")

    def _mark_built(self) -> None:
        """Mark this builder as having been used."""
        self._built = True
