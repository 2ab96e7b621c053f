from __future__ import annotations

import contextvars
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from errx.core.chain import as_, chain, wrap_prefix

# Shared empty context. Never run code inside it.
BACKGROUND = contextvars.Context()

Option = Callable[[BaseException], BaseException]


@dataclass(eq=False)
class CustomError(Exception):
    """An error carrying an HTTP status, an application code and a context.

    ``http_code`` and ``custom_code`` use 0 for "unset". ``context`` is the
    ``contextvars.Context`` captured for the request, or ``BACKGROUND``.

    Values are not mutated once returned from :func:`new` or :func:`wrap`;
    options build updated copies instead.
    """

    message: str
    cause: Optional[BaseException] = None
    http_code: int = 0
    custom_code: int = 0
    context: contextvars.Context = field(default_factory=lambda: BACKGROUND)
    # Plain error folded into ``message`` by coercion; walked, never printed.
    _origin: Optional[BaseException] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        super().__init__(self.message)
        self.__cause__ = self.unwrap()

    def __reduce__(self):
        return (
            self.__class__,
            (self.message, self.cause, self.http_code, self.custom_code, self.context, self._origin),
        )

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.cause}: {self.message}"

    def unwrap(self) -> Optional[BaseException]:
        if self.cause is not None:
            return self.cause
        return self._origin


def _apply(err: BaseException, **changes: Any) -> CustomError:
    found = as_(err, CustomError)
    if found is not None:
        return replace(found, **changes)
    return CustomError(message=str(err), _origin=err, **changes)


def with_http_code(code: int) -> Option:
    return lambda err: _apply(err, http_code=code)


def with_custom_code(code: int) -> Option:
    return lambda err: _apply(err, custom_code=code)


def with_context(ctx: contextvars.Context) -> Option:
    return lambda err: _apply(err, context=ctx)


def with_current_context() -> Option:
    """Capture the caller's contextvars (request id and friends) on the error."""
    return with_context(contextvars.copy_context())


def _apply_all(err: BaseException, options: tuple) -> BaseException:
    for opt in options:
        err = opt(err)
    return err


def new(message: str, *options: Option) -> BaseException:
    """Create an error.

    Without options this is a plain ``Exception``; enrichment only happens
    when at least one option is given.
    """
    if not options:
        return Exception(message)
    return _apply_all(CustomError(message=message, context=BACKGROUND), options)


def wrap(cause: Optional[BaseException], message: str, *options: Option) -> Optional[BaseException]:
    """Wrap cause with message. Returns None when cause is None.

    If cause (or anything it wraps) is a :class:`CustomError`, the result is a
    new CustomError pointing at it. Otherwise the message is prefixed onto the
    plain cause and options coerce the result as needed.
    """
    if cause is None:
        return None

    found = as_(cause, CustomError)
    if found is not None:
        err: BaseException = CustomError(message=message, cause=found)
    else:
        err = wrap_prefix(cause, message)
    return _apply_all(err, options)


def http_code_of(err: Optional[BaseException], default: int = 0) -> int:
    for e in chain(err):
        if isinstance(e, CustomError) and e.http_code:
            return e.http_code
    return default


def custom_code_of(err: Optional[BaseException], default: int = 0) -> int:
    for e in chain(err):
        if isinstance(e, CustomError) and e.custom_code:
            return e.custom_code
    return default


def context_of(err: Optional[BaseException]) -> contextvars.Context:
    for e in chain(err):
        if isinstance(e, CustomError) and e.context is not BACKGROUND:
            return e.context
    return BACKGROUND
