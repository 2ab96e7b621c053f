"""Errors with HTTP status codes, application codes and request context."""

from errx.core.chain import WrappedError, as_, chain, is_, unwrap
from errx.core.errors import (
    BACKGROUND,
    CustomError,
    Option,
    context_of,
    custom_code_of,
    http_code_of,
    new,
    with_context,
    with_current_context,
    with_custom_code,
    with_http_code,
    wrap,
)

__all__ = [
    "BACKGROUND",
    "CustomError",
    "Option",
    "WrappedError",
    "as_",
    "chain",
    "context_of",
    "custom_code_of",
    "http_code_of",
    "is_",
    "new",
    "unwrap",
    "with_context",
    "with_current_context",
    "with_custom_code",
    "with_http_code",
    "wrap",
]
