# serializers.py

from typing import Any, Callable

from errors import SerializationError

Serializer = Callable[[Any], bytes]


def text_serializer(element: Any) -> bytes:
    """Default: the element's str() form, UTF-8 encoded."""
    return str(element).encode("utf-8")


def utf8_serializer(element: str) -> bytes:
    # strict: refuses non-str elements instead of falling back to str()
    if not isinstance(element, str):
        raise TypeError(f"expected str, got {type(element).__name__}")
    return element.encode("utf-8")


def bytes_serializer(element: Any) -> bytes:
    if isinstance(element, (bytes, bytearray, memoryview)):
        return bytes(element)
    raise TypeError(f"expected bytes-like, got {type(element).__name__}")


def serialize(serializer: Serializer, element: Any) -> bytes:
    """
    Run `serializer` on `element` and check the result is bytes-like.
    Any failure is re-raised as SerializationError, chained to the cause.
    """
    try:
        data = serializer(element)
    except SerializationError:
        raise
    except Exception as e:
        raise SerializationError(element, str(e) or type(e).__name__) from e

    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if not isinstance(data, bytes):
        raise SerializationError(
            element, f"serializer returned {type(data).__name__}, expected bytes"
        )
    return data
