"""
Input parsing utilities for the sizing wizard
Form fields arrive as free text; these helpers turn them into numbers without raising
"""

import math
import re
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Any Unicode space, including the non-breaking ones used as thousands separators
_SPACES = re.compile(r"\s+")


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a numeric form value.

    Accepts ints, floats and strings with surrounding whitespace, a French
    decimal comma ("12,5") or spaces as thousands separators ("2 000").

    Args:
        value: Raw field value

    Returns:
        Finite float, or None when the value is blank or not a number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        result = float(value)
    else:
        text = _SPACES.sub('', str(value)).replace(',', '.')
        if not text:
            return None
        try:
            result = float(text)
        except ValueError:
            return None

    if not math.isfinite(result):
        return None
    return result


def safe_float(value: Any, default: float = 0.0) -> float:
    """
    Convert a form value to float, falling back to default when blank or invalid

    Args:
        value: Value to convert
        default: Value used when conversion fails

    Returns:
        Float value
    """
    result = parse_number(value)
    if result is None:
        if value not in (None, ''):
            logger.debug(f"Could not convert {value!r} to float, using default {default}")
        return default
    return result


def normalize_postal_code(postal_code: Any) -> str:
    """
    Normalize a French postal code typed in the beneficiary form.

    Corsican codes keep their digits ("20000"); letters and separators are stripped.
    Partial codes are returned as typed so lookups can still use their prefix.
    """
    if postal_code is None:
        return ''
    return re.sub(r'\D', '', str(postal_code))[:5]
