"""
Custom exceptions used by the key-value translation backend.

Keeping library-specific errors in one module gives users a predictable
import surface for catching and handling operational edge cases.
"""


class KvI18nError(Exception):
    """Base error type for all library-level exceptions."""


class UnsupportedValueKindError(KvI18nError):
    """
    Raised when a translation tree holds a terminal value that cannot be stored.

    Lazy values (callables evaluated at lookup time) and objects without a
    JSON representation fall in this category. The error is raised while the
    write stream is being produced, so entries already written by the same
    ``store_translations`` call are kept.
    """

    def __init__(self, key: str, value: object) -> None:
        self.key = key
        self.value = value
        if callable(value):
            message = f"Key-value stores cannot handle lazy values (key={key!r})."
        else:
            message = (
                f"Key-value stores cannot handle values of type "
                f"{type(value).__name__!r} (key={key!r})."
            )
        super().__init__(message)


class BackendConfigurationError(KvI18nError):
    """Raised when a store backend name or its options are invalid."""


class InvalidAddressError(BackendConfigurationError):
    """
    Raised when a store address specification cannot be parsed.

    Valid specifications look like ``host[:port][/db][/namespace]`` or a
    ``redis://`` URL.
    """


class BackendNotAvailableError(KvI18nError):
    """Raised when an optional backend plugin package is not installed."""
