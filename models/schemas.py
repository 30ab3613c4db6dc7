from __future__ import annotations

from typing import NamedTuple, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    PositiveInt,
    field_validator,
)

from config.settings import settings
from models.enums import ScalarKind, SizeUnit


class Calibration(BaseModel):
    """Word costs of one runtime's term layout (64-bit BEAM by default).

    Re-derive these when targeting a runtime with a different heap layout.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    word_bytes: PositiveInt = 8
    small_integer_bits: PositiveInt = 60
    scalar_words: dict[ScalarKind, NonNegativeInt] = Field(
        default_factory=lambda: {
            ScalarKind.SMALL_INTEGER: 0,
            ScalarKind.BIG_INTEGER: 1,
            ScalarKind.FLOAT: 2,
            ScalarKind.ATOM: 0,
            ScalarKind.LOCAL_PID: 0,
            ScalarKind.PORT: 0,
            ScalarKind.REFERENCE: 4,
            ScalarKind.FUNCTION: 2,
        }
    )
    # Cons cell: head + tail
    list_cell_words: NonNegativeInt = 2
    # Arity word in front of the slots
    tuple_header_words: NonNegativeInt = 1
    small_map_limit: NonNegativeInt = 32
    small_map_header_words: NonNegativeInt = 4
    small_map_slot_words: NonNegativeInt = 2
    # 1.6-1.8 words of trie overhead per entry plus a word each for key and value
    large_map_words_per_entry: NonNegativeFloat = 3.7
    empty_binary_words: NonNegativeInt = 2
    heap_binary_limit: NonNegativeInt = 64
    heap_binary_header_words: NonNegativeInt = 2
    off_heap_binary_words: NonNegativeInt = 6
    # Struct map of three keys: type tag, members map, version
    bounded_set_overhead_words: NonNegativeInt = 10

    @field_validator("scalar_words")
    @classmethod
    def _covers_every_kind(cls, value: dict[ScalarKind, int]) -> dict[ScalarKind, int]:
        missing = [kind.value for kind in ScalarKind if kind not in value]
        if missing:
            raise ValueError(f"scalar_words is missing {', '.join(missing)}")
        return value

    def scalar_cost(self, kind: ScalarKind, extra_words: int = 0) -> int:
        return self.scalar_words[kind] + extra_words

    def map_overhead(self, size: int) -> float:
        if size > self.small_map_limit:
            return self.large_map_words_per_entry * size
        return self.small_map_header_words + self.small_map_slot_words * size

    def binary_words(self, length: int) -> int:
        """Header plus payload words the runtime reports for a binary."""
        if length == 0:
            return self.empty_binary_words
        if length <= self.heap_binary_limit:
            return self.heap_binary_header_words + -(-length // self.word_bytes)
        return self.off_heap_binary_words


class SummaryOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    sample_size: int = Field(default_factory=lambda: settings.DEFAULT_SAMPLE_SIZE, gt=0, strict=True)
    # -1 keeps every entry
    min_size: float = -1
    # 0 keeps only the top level, None is unlimited
    max_depth: Optional[int] = Field(default=None, ge=0, strict=True)
    precision: int = Field(default_factory=lambda: settings.DEFAULT_PRECISION, ge=0, strict=True)
    sort_by_size: bool = False
    unit: SizeUnit = SizeUnit.WORD


class SummaryEntry(NamedTuple):
    size: float
    unit: SizeUnit
    path: tuple[str, ...]
