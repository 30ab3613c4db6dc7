from __future__ import annotations


class FootprintError(Exception):
    """Base class for estimator failures."""


class UnsupportedValueKindError(FootprintError, TypeError):
    def __init__(self, value: object) -> None:
        self.value_type = type(value)
        super().__init__(f"unsupported value kind: {self.value_type.__qualname__}")


class InvalidSampleSizeError(FootprintError, ValueError):
    def __init__(self, sample_size: object) -> None:
        self.sample_size = sample_size
        super().__init__(f"sample_size must be a positive integer, got {sample_size!r}")


class CalibrationError(FootprintError):
    """Raised when a calibration table cannot be parsed or validated."""


class CyclicValueError(FootprintError, ValueError):
    def __init__(self, value: object) -> None:
        self.value_type = type(value)
        super().__init__(f"value of kind {self.value_type.__qualname__} contains itself")
