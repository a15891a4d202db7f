"""Error context chains and the exception types raised by the layout engine."""

from __future__ import annotations

from typing import Optional, Union


class ErrorContext:
    """Accumulates a human-readable call chain for error messages.

    Each public operation extends the chain it received with its own name,
    so an error raised deep inside a render reads like
    ``LineCollection.render() - lines[2] - StandardLine.render()``.
    An absent context is an empty chain.
    """

    __slots__ = ("_links",)

    def __init__(self, *links: str):
        self._links: tuple[str, ...] = tuple(link for link in links if link)

    @classmethod
    def coerce(cls, value: "ContextLike") -> "ErrorContext":
        """Return an ErrorContext for None, a string or an existing context."""
        if value is None:
            return cls()
        if isinstance(value, ErrorContext):
            return value
        return cls(str(value))

    def extend(self, link: str) -> "ErrorContext":
        """Return a new context with ``link`` appended to the chain."""
        return ErrorContext(*self._links, link)

    @property
    def links(self) -> tuple[str, ...]:
        return self._links

    def __bool__(self) -> bool:
        return bool(self._links)

    def __str__(self) -> str:
        return " - ".join(self._links)

    def __repr__(self) -> str:
        return f"ErrorContext({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorContext):
            return NotImplemented
        return self._links == other._links

    def __hash__(self) -> int:
        return hash(self._links)


ContextLike = Union[ErrorContext, str, None]


class TextLayoutError(Exception):
    """Base class for every error raised by the layout engine."""

    def __init__(self, message: str, context: ContextLike = None):
        self.message = message
        self.context = ErrorContext.coerce(context)
        super().__init__(self._compose())

    def _compose(self) -> str:
        if self.context:
            return f"{self.context}\n{self.message}"
        return self.message


class ValidationError(TextLayoutError):
    """A field, line or collection failed a structural check."""


class IndexOutOfRangeError(TextLayoutError, IndexError):
    """An index addressed a position outside ``[0, len)``."""

    def __init__(self, index: int, length: int, context: ContextLike = None):
        self.index = index
        self.length = length
        super().__init__(
            f"Index {index} is out of range. Valid indexes are 0 through {length - 1}.",
            context,
        )


class EmptyCollectionError(TextLayoutError):
    """An element was requested from a collection with no elements."""


class InvalidElementError(TextLayoutError):
    """A collection element is missing or fails its own validation."""

    def __init__(self, index: int, message: str, context: ContextLike = None):
        self.index = index
        super().__init__(message, context)


class MissingStandardParamsError(TextLayoutError):
    """A formatter request has no explicit parameters and no standard ones."""


class NilArgumentError(TextLayoutError):
    """A required argument was None."""

    def __init__(self, name: str, context: ContextLike = None):
        self.argument = name
        super().__init__(f"Input parameter '{name}' is None.", context)


class LineRenderError(TextLayoutError):
    """Rendering a collection failed at a particular element.

    ``partial_text`` holds everything rendered before the failing element;
    the original error is chained as ``__cause__``.
    """

    def __init__(self, index: int, message: str, partial_text: str = "",
                 context: ContextLike = None):
        self.index = index
        self.partial_text = partial_text
        super().__init__(message, context)
