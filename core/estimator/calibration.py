from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from config.settings import settings
from models.errors import CalibrationError
from models.schemas import Calibration

logger = structlog.get_logger(__name__)

DEFAULT_CALIBRATION = Calibration()


def load_calibration(path: str | Path | None = None) -> Calibration:
    """Read a calibration table from YAML, layered over the built-in defaults.

    A missing file yields the defaults. A file that exists but does not parse
    or validate raises CalibrationError.
    """
    path = Path(path or settings.CALIBRATION_PATH)
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.info("calibration.defaults_used", path=str(path))
        return DEFAULT_CALIBRATION
    except yaml.YAMLError as e:
        raise CalibrationError(f"cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise CalibrationError(f"{path} must contain a mapping, got {type(data).__name__}")

    # Partial scalar tables only override the kinds they name
    scalar_words = {k.value: v for k, v in DEFAULT_CALIBRATION.scalar_words.items()}
    scalar_words.update(data.get("scalar_words") or {})
    data["scalar_words"] = scalar_words

    try:
        calibration = Calibration.model_validate(data)
    except ValidationError as e:
        raise CalibrationError(f"invalid calibration in {path}: {e}") from e

    logger.info("calibration.loaded", path=str(path))
    return calibration
