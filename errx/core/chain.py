from __future__ import annotations

from typing import Iterator, Optional, Type, TypeVar

E = TypeVar("E", bound=BaseException)


class WrappedError(Exception):
    """A plain error that prefixes a message onto its cause's text."""

    def __init__(self, message: str, cause: BaseException) -> None:
        super().__init__(f"{message}: {cause}")
        self.message = message
        self.__cause__ = cause

    def unwrap(self) -> Optional[BaseException]:
        return self.__cause__


def wrap_prefix(cause: BaseException, message: str) -> WrappedError:
    return WrappedError(message, cause)


def unwrap(err: BaseException) -> Optional[BaseException]:
    """Return the next error in the chain, or None at the root."""
    fn = getattr(err, "unwrap", None)
    if callable(fn):
        return fn()
    return err.__cause__


def chain(err: Optional[BaseException]) -> Iterator[BaseException]:
    # Self-referential chains are a caller error and are not guarded against.
    while err is not None:
        yield err
        err = unwrap(err)


def is_(err: Optional[BaseException], target: BaseException) -> bool:
    """Report whether target appears anywhere in err's chain."""
    for e in chain(err):
        if e is target or e == target:
            return True
    return False


def as_(err: Optional[BaseException], cls: Type[E]) -> Optional[E]:
    """Return the first error in the chain that is an instance of cls."""
    for e in chain(err):
        if isinstance(e, cls):
            return e
    return None
