from .handlers import register_error_handlers, status_for

__all__ = ["register_error_handlers", "status_for"]
