"""Unit tests for the native-object adapter."""
from __future__ import annotations

import datetime as dt
from collections import deque, namedtuple
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from uuid import uuid4

import pytest
from pydantic import BaseModel

from models.adapters import to_value
from models.enums import ScalarKind
from models.errors import UnsupportedValueKindError
from models.values import BoundedSet, ByteSequence, Map, Record, Scalar, Sequence, Tuple

Point = namedtuple("Point", ["x", "y"])


class Status(Enum):
    ACTIVE = 1


@dataclass
class Session:
    user_id: int
    token: str


class Profile(BaseModel):
    name: str
    tags: list[str] = []


class TestToValue:
    @pytest.mark.parametrize("atom", [None, True, False, Status.ACTIVE])
    def test_atoms(self, atom) -> None:
        assert to_value(atom) == Scalar(ScalarKind.ATOM)

    def test_integers(self) -> None:
        assert to_value(5) == Scalar(ScalarKind.SMALL_INTEGER)
        assert to_value(2**64) == Scalar(ScalarKind.BIG_INTEGER, extra_words=2)

    def test_small_integer_width_is_configurable(self) -> None:
        assert to_value(2**40, small_integer_bits=32).kind == ScalarKind.BIG_INTEGER

    def test_float(self) -> None:
        assert to_value(1.5) == Scalar(ScalarKind.FLOAT)

    def test_text_is_utf8_bytes(self) -> None:
        assert to_value("héllo") == ByteSequence(6)
        assert to_value(b"abc") == ByteSequence(3)
        assert to_value(memoryview(b"abcd")) == ByteSequence(4)
        assert to_value(uuid4()) == ByteSequence(16)

    def test_collections_are_wrapped_without_copying(self) -> None:
        items = [1, 2]
        wrapped = to_value(items)
        assert isinstance(wrapped, Sequence)
        assert wrapped.items is items

        assert isinstance(to_value(deque([1])), Sequence)
        assert isinstance(to_value((1, 2)), Tuple)
        assert isinstance(to_value({1: 2}), Map)
        assert isinstance(to_value({1, 2}), BoundedSet)

    def test_records(self) -> None:
        session = to_value(Session(user_id=1, token="t"))
        assert session == Record("Session", {"user_id": 1, "token": "t"})
        assert session.entry_count == 3

        profile = to_value(Profile(name="n"))
        assert profile == Record("Profile", {"name": "n", "tags": []})

        point = to_value(Point(1, 2))
        assert point == Record("Point", {"x": 1, "y": 2})

    def test_temporal_values_become_records(self) -> None:
        moment = to_value(dt.datetime(2024, 1, 2, 3, 4, 5, tzinfo=dt.timezone.utc))
        assert isinstance(moment, Record)
        assert moment.type_name == "datetime"
        assert moment.fields["year"] == 2024
        assert moment.fields["tzinfo"] == "UTC"

        assert to_value(dt.date(2024, 1, 2)).fields == {"year": 2024, "month": 1, "day": 2}
        assert to_value(dt.timedelta(days=1)).fields["days"] == 1
        assert to_value(Decimal("-1.50")).fields == {"sign": 1, "coef": 150, "exp": -2}

    def test_callables_are_function_scalars(self) -> None:
        assert to_value(len) == Scalar(ScalarKind.FUNCTION)
        assert to_value(lambda: None) == Scalar(ScalarKind.FUNCTION)

    def test_values_pass_through(self) -> None:
        value = Scalar(ScalarKind.PORT)
        assert to_value(value) is value

    def test_dataclass_types_are_not_records(self) -> None:
        # The class object itself is callable, not an instance
        assert to_value(Session) == Scalar(ScalarKind.FUNCTION)

    def test_unsupported_kind(self) -> None:
        with pytest.raises(UnsupportedValueKindError) as exc_info:
            to_value(object())
        assert exc_info.value.value_type is object
