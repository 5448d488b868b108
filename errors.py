# errors.py

from typing import Any


class ConfigurationError(ValueError):
    """Raised when a hash family or filter is built with unusable options.

    Attributes:
        option: Name of the offending option
        value: The rejected value
    """

    def __init__(self, option: str, value: Any, reason: str) -> None:
        self.option = option
        self.value = value
        super().__init__(f"Invalid {option}={value!r}: {reason}")


class SerializationError(ValueError):
    """Raised when an element cannot be turned into bytes.

    Attributes:
        element: The element that failed to serialize
    """

    def __init__(self, element: Any, reason: str) -> None:
        self.element = element
        super().__init__(f"Cannot serialize {type(element).__name__} element: {reason}")
