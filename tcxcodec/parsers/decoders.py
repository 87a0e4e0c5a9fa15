"""Primitive decoders turning TCX element text into typed values.

Every decoder raises ``ValueError`` with a short reason when the text does
not decode. The entity builder turns that into ``InvalidValue`` carrying the
field name and the element path.
"""

import logging
import math
import re
from datetime import datetime
from enum import Enum
from typing import Optional, Type, Union

from dateutil.parser import isoparse

from ..models.enums import Unrecognized

logger = logging.getLogger(__name__)

_TIMESTAMP_RE = re.compile(
    r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}([.,]\d+)?)?(Z|z|[+-]\d{2}(:?\d{2})?)?$'
)
_DECIMAL_RE = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')
_INTEGER_RE = re.compile(r'^[+-]?\d+$')


def _strip(text: Optional[str]) -> str:
    return (text or '').strip()


def decode_text(text: Optional[str]) -> str:
    """Free text; an empty element decodes to an empty string."""
    return text or ''


def decode_timestamp(text: Optional[str]) -> datetime:
    """Decode an ISO-8601 timestamp with mandatory date and time.

    The UTC offset, when present, stays on the returned value.
    """
    value = _strip(text)
    if not _TIMESTAMP_RE.match(value):
        raise ValueError("expected ISO-8601 date and time")
    try:
        return isoparse(value)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"not a valid timestamp ({e})")


def decode_float(text: Optional[str]) -> float:
    """Strict base-10 decimal (sign, digits, fraction, exponent)."""
    value = _strip(text)
    if not _DECIMAL_RE.match(value):
        raise ValueError("expected a decimal number")
    result = float(value)
    if not math.isfinite(result):
        raise ValueError("number out of range")
    return result


def decode_non_negative_float(text: Optional[str]) -> float:
    value = decode_float(text)
    if value < 0:
        raise ValueError("must not be negative")
    return value


def decode_duration(text: Optional[str]) -> float:
    """Elapsed time as plain float seconds (not an ISO-8601 duration)."""
    return decode_non_negative_float(text)


def decode_int(text: Optional[str]) -> int:
    value = _strip(text)
    if not _INTEGER_RE.match(value):
        raise ValueError("expected a base-10 integer")
    return int(value)


def decode_non_negative_int(text: Optional[str]) -> int:
    value = decode_int(text)
    if value < 0:
        raise ValueError("must not be negative")
    return value


def decode_heart_rate(text: Optional[str]) -> int:
    value = decode_int(text)
    if not 0 <= value <= 255:
        raise ValueError("heart rate must be within 0..255 bpm")
    return value


def decode_latitude(text: Optional[str]) -> float:
    value = decode_float(text)
    if not -90.0 <= value <= 90.0:
        raise ValueError("latitude must be within -90..90 degrees")
    return value


def decode_longitude(text: Optional[str]) -> float:
    value = decode_float(text)
    if not -180.0 <= value <= 180.0:
        raise ValueError("longitude must be within -180..180 degrees")
    return value


def decode_enum(enum_cls: Type[Enum], text: Optional[str]) -> Union[Enum, Unrecognized]:
    """Case-sensitive match against ``enum_cls`` values.

    Text outside the vocabulary comes back as ``Unrecognized`` instead of
    failing the document.
    """
    value = text or ''
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(f"Unrecognized {enum_cls.__name__} value: {value!r}")
        return Unrecognized(value)


def enum_decoder(enum_cls: Type[Enum]):
    """Bind ``decode_enum`` to one vocabulary."""
    def decoder(text: Optional[str]):
        return decode_enum(enum_cls, text)
    decoder.__name__ = f"decode_{enum_cls.__name__.lower()}"
    return decoder
