"""Tagged value model the estimator pattern-matches over.

Collection variants hold their children as-is: a child may already be a
``Value`` or a plain Python object that is converted on demand when the
estimator samples it. Nothing here copies or walks the contents.
"""
from __future__ import annotations

from collections.abc import Collection, Mapping
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from typing import Any, Union

from models.enums import ScalarKind


@dataclass(frozen=True)
class Scalar:
    kind: ScalarKind
    # Digit words carried by a big integer on top of its header
    extra_words: int = 0

    @classmethod
    def integer(cls, number: int, small_integer_bits: int = 60, digit_bits: int = 64) -> Scalar:
        limit = 1 << (small_integer_bits - 1)
        if -limit <= number < limit:
            return cls(ScalarKind.SMALL_INTEGER)
        digits = -(-abs(number).bit_length() // digit_bits)
        return cls(ScalarKind.BIG_INTEGER, extra_words=digits)

    @classmethod
    def atom(cls) -> Scalar:
        return cls(ScalarKind.ATOM)


@dataclass(frozen=True)
class ByteSequence:
    length: int

    @classmethod
    def of(cls, data: bytes | bytearray | memoryview | str) -> ByteSequence:
        if isinstance(data, memoryview):
            return cls(data.nbytes)
        if isinstance(data, str):
            data = data.encode("utf-8")
        return cls(len(data))


@dataclass(frozen=True)
class Sequence:
    items: SequenceABC[Any]

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Tuple:
    items: SequenceABC[Any]

    @property
    def arity(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Map:
    entries: Mapping[Any, Any]

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class Record:
    """A map with a fixed field set and a type tag."""

    type_name: str
    fields: Mapping[str, Any]

    @property
    def entry_count(self) -> int:
        # The type tag occupies one slot next to the fields
        return len(self.fields) + 1


@dataclass(frozen=True)
class BoundedSet:
    """Set-like container stored as a map of members to empty placeholders."""

    members: Collection[Any]

    def __len__(self) -> int:
        return len(self.members)


Value = Union[Scalar, ByteSequence, Sequence, Tuple, Map, Record, BoundedSet]

VALUE_TYPES: tuple[type, ...] = (Scalar, ByteSequence, Sequence, Tuple, Map, Record, BoundedSet)


def is_value(obj: object) -> bool:
    return isinstance(obj, VALUE_TYPES)


def sequence_of(*items: Any) -> Sequence:
    return Sequence(items)


def tuple_of(*items: Any) -> Tuple:
    return Tuple(items)


def charlist(text: str) -> Sequence:
    """A string stored as a linked list of code points rather than bytes."""
    return Sequence(tuple(Scalar.integer(ord(ch)) for ch in text))
