# hash_family.py

"""
Salted hash families derived from one digest algorithm.

Function h_i hashes an element as

    digest(digest(int32_be(i)) ++ serializer(element))

and keeps the first 4 bytes of the result as a signed big-endian int,
folded to a non-negative value in [0, 2**31).
"""

from __future__ import annotations

import hashlib

from typing import Any, Callable, Dict, Tuple

import structlog

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from errors import ConfigurationError
from serializers import Serializer, serialize, text_serializer

logger = structlog.get_logger(__name__)

DEFAULT_ALGORITHM = "md5"
DEFAULT_FUNCTION_COUNT = 10
MAX_FUNCTION_COUNT = 2**31 - 1  # salts are encoded as signed 32-bit ints

_INT32_MIN = -(2**31)


class HashFamilyConfig(BaseModel):
    """Immutable description of a hash family; consumed by build_hash_family()."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    serializer: Callable[[Any], bytes] = Field(default=text_serializer)
    function_count: int = Field(DEFAULT_FUNCTION_COUNT, strict=True, gt=0, le=MAX_FUNCTION_COUNT)
    algorithm: str = Field(DEFAULT_ALGORITHM, min_length=1)


def resolve_algorithm(name: str) -> str:
    """
    Map a user-supplied digest name onto a hashlib algorithm.

    Matching is case-insensitive and accepts hyphenated spellings
    ("SHA-256", "SHA3-256"). Raises ConfigurationError for unknown names,
    variable-length digests (shake_*) and digests shorter than 4 bytes.
    """
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError("algorithm", name, "must be a non-empty digest name")

    wanted = name.strip().lower()
    available: Dict[str, str] = {}
    for a in sorted(hashlib.algorithms_available, reverse=True):
        available.setdefault(a.lower(), a)  # lowercase spelling wins
    for candidate in (wanted, wanted.replace("-", ""), wanted.replace("-", "_")):
        if candidate in available:
            resolved = available[candidate]
            break
    else:
        raise ConfigurationError(
            "algorithm", name, f"unknown digest; available: {', '.join(sorted(available))}"
        )

    try:
        probe = hashlib.new(resolved, usedforsecurity=False)
    except ValueError as e:
        # listed but refused by the backend (e.g. md5 under FIPS)
        raise ConfigurationError("algorithm", name, str(e)) from e

    if probe.digest_size < 4:
        raise ConfigurationError(
            "algorithm", name, "variable-length or too-short digests are not supported"
        )
    return resolved


def _int_to_bytes(value: int) -> bytes:
    return value.to_bytes(4, "big", signed=True)


def _to_non_negative(digest: bytes) -> int:
    value = int.from_bytes(digest[:4], "big", signed=True)
    # abs(-2**31) does not fit in 31 bits; that single value maps to 0
    if value == _INT32_MIN:
        return 0
    return abs(value)


class SaltedHash:
    """One member h_i of a hash family. Callable: h(element) -> int."""

    __slots__ = ("salt", "algorithm", "_serializer", "_seeded")

    def __init__(self, algorithm: str, salt: int, serializer: Serializer = text_serializer):
        self.salt = salt
        self.algorithm = algorithm
        self._serializer = serializer

        salt_digest = hashlib.new(algorithm, _int_to_bytes(salt), usedforsecurity=False).digest()
        # Never updated after this point; every call hashes on a copy.
        self._seeded = hashlib.new(algorithm, salt_digest, usedforsecurity=False)

    def __call__(self, element: Any) -> int:
        engine = self._seeded.copy()
        engine.update(serialize(self._serializer, element))
        return _to_non_negative(engine.digest())

    def __repr__(self) -> str:
        return f"SaltedHash(algorithm={self.algorithm!r}, salt={self.salt})"


def build_hash_family(config: HashFamilyConfig) -> Tuple[SaltedHash, ...]:
    algorithm = resolve_algorithm(config.algorithm)
    family = tuple(
        SaltedHash(algorithm, salt, config.serializer) for salt in range(config.function_count)
    )
    logger.debug("hash_family_built", algorithm=algorithm, function_count=len(family))
    return family


class HashFamilyBuilder:
    """
    Fluent front-end over HashFamilyConfig:

        HashFamilyBuilder().algorithm("sha256").function_count(5).build()

    Options left unset keep the HashFamilyConfig defaults. Invalid options
    are reported as ConfigurationError when build() (or config()) runs.
    """

    def __init__(self) -> None:
        self._options: Dict[str, Any] = {}

    def serializer(self, serializer: Serializer) -> "HashFamilyBuilder":
        self._options["serializer"] = serializer
        return self

    def function_count(self, count: int) -> "HashFamilyBuilder":
        self._options["function_count"] = count
        return self

    def algorithm(self, name: str) -> "HashFamilyBuilder":
        self._options["algorithm"] = name
        return self

    def config(self) -> HashFamilyConfig:
        try:
            return HashFamilyConfig(**self._options)
        except ValidationError as e:
            first = e.errors()[0]
            option = str(first["loc"][0]) if first.get("loc") else "config"
            raise ConfigurationError(option, self._options.get(option), first["msg"]) from e

    def build(self) -> Tuple[SaltedHash, ...]:
        return build_hash_family(self.config())
