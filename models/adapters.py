"""Shallow conversion of live Python objects into the value model."""
from __future__ import annotations

import dataclasses
import datetime as dt
from collections import deque
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from models.enums import ScalarKind
from models.errors import UnsupportedValueKindError
from models.values import (
    BoundedSet,
    ByteSequence,
    Map,
    Record,
    Scalar,
    Sequence,
    Tuple,
    Value,
    is_value,
)


def to_value(obj: Any, small_integer_bits: int = 60) -> Value:
    """Wrap ``obj`` as a Value without visiting its children.

    Containers keep a reference to the original object, so the caller must
    not mutate it while an estimate is running.
    """
    if is_value(obj):
        return obj

    # bool and Enum before int: both can be int subclasses
    if obj is None or isinstance(obj, (bool, Enum)):
        return Scalar.atom()
    if isinstance(obj, int):
        return Scalar.integer(obj, small_integer_bits=small_integer_bits)
    if isinstance(obj, float):
        return Scalar(ScalarKind.FLOAT)
    if isinstance(obj, (str, bytes, bytearray, memoryview)):
        return ByteSequence.of(obj)
    if isinstance(obj, UUID):
        return ByteSequence(16)
    if isinstance(obj, (dt.date, dt.time, dt.timedelta, Decimal)):
        return _temporal_record(obj)
    if isinstance(obj, (list, deque)):
        return Sequence(obj)
    if isinstance(obj, tuple):
        if hasattr(obj, "_fields"):
            return Record(type(obj).__qualname__, obj._asdict())
        return Tuple(obj)
    if isinstance(obj, dict):
        return Map(obj)
    if isinstance(obj, (set, frozenset)):
        return BoundedSet(obj)
    if isinstance(obj, BaseModel):
        fields = {name: getattr(obj, name) for name in type(obj).model_fields}
        return Record(type(obj).__qualname__, fields)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        fields = {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
        return Record(type(obj).__qualname__, fields)
    if callable(obj):
        return Scalar(ScalarKind.FUNCTION)

    raise UnsupportedValueKindError(obj)


def _temporal_record(obj: dt.date | dt.time | dt.timedelta | Decimal) -> Record:
    # Calendar and decimal types become small records of their components
    if isinstance(obj, Decimal):
        sign, digits, exponent = obj.as_tuple()
        coefficient = int("".join(map(str, digits)) or "0")
        return Record("Decimal", {"sign": sign, "coef": coefficient, "exp": exponent})
    if isinstance(obj, dt.timedelta):
        return Record("timedelta", {"days": obj.days, "seconds": obj.seconds, "microseconds": obj.microseconds})

    fields: dict[str, Any] = {}
    if isinstance(obj, dt.date):
        fields.update(year=obj.year, month=obj.month, day=obj.day)
    if isinstance(obj, (dt.datetime, dt.time)):
        fields.update(hour=obj.hour, minute=obj.minute, second=obj.second, microsecond=obj.microsecond)
        fields["tzinfo"] = obj.tzname()
    return Record(type(obj).__name__, fields)
