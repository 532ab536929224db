"""Non-destructive edit operations and their canonical JSON encoding."""

import json
import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import ClassVar

from neoedit.errors import (
    EqFreqOutOfRangeError,
    GainOutOfRangeError,
    InvalidOperationError,
    InvalidTrimRangeError,
    PanOutOfRangeError,
    SerializationError,
    _display_float,
)

_REGISTRY = {}


def _json_float(value):
    """Encode a float in the shortest form used by the canonical JSON."""
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "-0.0" if math.copysign(1.0, value) < 0 else "0.0"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    raw = "".join(map(str, digit_tuple))
    digits = raw.rstrip("0")
    exponent += len(raw) - len(digits)
    length = len(digits)
    point = length + exponent
    if 0 <= exponent and point <= 16:
        body = digits + "0" * exponent + ".0"
    elif 0 < point <= 16:
        body = f"{digits[:point]}.{digits[point:]}"
    elif -5 < point <= 0:
        body = "0." + "0" * -point + digits
    elif length == 1:
        body = f"{digits}e{point - 1}"
    else:
        body = f"{digits[0]}.{digits[1:]}e{point - 1}"
    return ("-" if sign else "") + body


def _json_value(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _json_float(value)
    return json.dumps(value, ensure_ascii=False)


class EditOp:
    """Base class of the edit operations; each targets one stem."""

    tag: ClassVar[str]

    def __init_subclass__(cls, *, tag=None, **kwargs):
        super().__init_subclass__(**kwargs)
        if tag is not None:
            cls.tag = tag
            _REGISTRY[tag] = cls

    def __post_init__(self):
        stem_id = self.stem_id
        if isinstance(stem_id, bool) or not isinstance(stem_id, int) or not 0 <= stem_id <= 255:
            raise ValueError(f"stem_id must be an integer in 0..=255, got {stem_id!r}")
        for field in fields(self):
            if field.name == "stem_id":
                continue
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise TypeError(f"{field.name} must be a number, got {value!r}")
            object.__setattr__(self, field.name, float(value))

    def _check(self):
        """Raise if the parameters are out of bounds; no-op by default."""

    def validate(self):
        """Check that the parameters are within legal bounds; return the op."""
        self._check()
        return self

    def to_dict(self):
        """Return the tagged mapping form of the operation."""
        return {"type": self.tag, **{f.name: getattr(self, f.name) for f in fields(self)}}

    def to_json_bytes(self):
        """Return the compact canonical JSON encoding used for hashing."""
        members = ",".join(
            f"{json.dumps(key)}:{_json_value(value)}" for key, value in self.to_dict().items()
        )
        return ("{" + members + "}").encode("utf-8")

    @classmethod
    def from_dict(cls, data):
        """Build an operation from its tagged mapping form."""
        if not isinstance(data, Mapping):
            raise SerializationError(
                f"invalid type: {type(data).__name__}, expected an edit operation object"
            )
        if "type" not in data:
            raise SerializationError("missing field `type`")
        tag = data["type"]
        klass = _REGISTRY.get(tag) if isinstance(tag, str) else None
        if klass is None:
            expected = ", ".join(f"`{name}`" for name in _REGISTRY)
            raise SerializationError(f"unknown variant `{tag}`, expected one of {expected}")
        if not issubclass(klass, cls):
            raise SerializationError(f"variant `{tag}` is not a {cls.__name__}")
        kwargs = {}
        for field in fields(klass):
            if field.name not in data:
                raise SerializationError(f"missing field `{field.name}`")
            kwargs[field.name] = data[field.name]
        try:
            return klass(**kwargs)
        except (TypeError, ValueError) as exc:
            raise SerializationError(str(exc)) from exc


@dataclass(frozen=True)
class Trim(EditOp, tag="trim"):
    """Keep only the range [start_s, end_s) of the stem."""

    stem_id: int
    start_s: float
    end_s: float

    def _check(self):
        if self.start_s < 0.0 or self.end_s < 0.0 or self.start_s >= self.end_s:
            raise InvalidTrimRangeError(self.start_s, self.end_s)


@dataclass(frozen=True)
class Gain(EditOp, tag="gain"):
    """Apply a gain in decibels (at most ±60 dB)."""

    stem_id: int
    db: float

    def _check(self):
        if abs(self.db) > 60.0:
            raise GainOutOfRangeError(self.db)


@dataclass(frozen=True)
class Eq(EditOp, tag="eq"):
    """A parametric EQ band."""

    stem_id: int
    freq_hz: float
    gain_db: float
    q: float

    def _check(self):
        if self.freq_hz < 20.0 or self.freq_hz > 20_000.0:
            raise EqFreqOutOfRangeError(self.freq_hz)


@dataclass(frozen=True)
class Fade(EditOp, tag="fade"):
    """Linear fade-in and fade-out envelope."""

    stem_id: int
    fade_in_s: float
    fade_out_s: float

    def _check(self):
        if self.fade_in_s < 0.0 or self.fade_out_s < 0.0:
            raise InvalidOperationError(
                "fade durations must be non-negative: "
                f"fade_in={_display_float(self.fade_in_s)}, "
                f"fade_out={_display_float(self.fade_out_s)}"
            )


@dataclass(frozen=True)
class Mute(EditOp, tag="mute"):
    """Silence a stem entirely."""

    stem_id: int


@dataclass(frozen=True)
class Pan(EditOp, tag="pan"):
    """Stereo pan position: -1.0 left, 0.0 centre, 1.0 right."""

    stem_id: int
    position: float

    def _check(self):
        if self.position < -1.0 or self.position > 1.0:
            raise PanOutOfRangeError(self.position)


@dataclass(frozen=True)
class Reverse(EditOp, tag="reverse"):
    """Play a stem backwards."""

    stem_id: int


@dataclass(frozen=True)
class TimeStretch(EditOp, tag="timestretch"):
    """Change duration without changing pitch (factor > 1 is slower)."""

    stem_id: int
    factor: float

    def _check(self):
        if self.factor <= 0.0:
            raise InvalidOperationError(
                f"time stretch factor must be positive: {_display_float(self.factor)}"
            )


def ops_to_json_bytes(ops):
    """Return the compact canonical JSON array encoding of ``ops``."""
    return b"[" + b",".join(op.to_json_bytes() for op in ops) + b"]"