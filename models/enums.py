from __future__ import annotations

from enum import Enum


class ScalarKind(str, Enum):
    SMALL_INTEGER = "SMALL_INTEGER"
    BIG_INTEGER = "BIG_INTEGER"
    FLOAT = "FLOAT"
    ATOM = "ATOM"
    LOCAL_PID = "LOCAL_PID"
    PORT = "PORT"
    REFERENCE = "REFERENCE"
    FUNCTION = "FUNCTION"


class SizeUnit(str, Enum):
    WORD = "word"
    BYTE = "byte"
    KILOBYTE = "kilobyte"
    MEGABYTE = "megabyte"
    GIGABYTE = "gigabyte"
