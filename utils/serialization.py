import dataclasses
import math
from datetime import datetime
from enum import Enum

import numpy as np
from fastapi.responses import JSONResponse


def _clean_float(value: float):
    # JSON has no NaN or Infinity
    if math.isnan(value) or math.isinf(value):
        return None
    return float(value)


def sanitize_for_json(data):
    """
    Convert analysis output into plain JSON values.

    Handles frozen result dataclasses, enums, datetimes, numpy scalars and
    arrays, and non-finite floats (emitted as null).
    """
    if isinstance(data, Enum):
        return data.value
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        to_dict = getattr(data, "to_dict", None)
        return sanitize_for_json(to_dict() if to_dict else dataclasses.asdict(data))
    if isinstance(data, dict):
        return {str(key): sanitize_for_json(value) for key, value in data.items()}
    if isinstance(data, (list, tuple, set)):
        return [sanitize_for_json(item) for item in data]
    if isinstance(data, np.ndarray):
        return sanitize_for_json(data.tolist())
    if isinstance(data, np.generic):
        return sanitize_for_json(data.item())
    if isinstance(data, datetime):
        return data.isoformat()
    if isinstance(data, float):
        return _clean_float(data)
    return data


class CustomJSONResponse(JSONResponse):
    """JSONResponse that accepts analysis results and numpy values."""
    def render(self, content) -> bytes:
        return super().render(sanitize_for_json(content))
