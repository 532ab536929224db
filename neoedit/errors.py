"""Exceptions raised by edit operations, edit graphs and edit histories."""

import math
from decimal import Decimal


def _display_float(value):
    """Render a float the way the file format's messages show numbers."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")


class EditError(Exception):
    """Base class for every error raised while editing."""


class EmptyHistoryError(EditError):
    """The edit history has no commits."""

    def __init__(self):
        super().__init__("empty edit history — no commits")


class CommitNotFoundError(EditError):
    """No commit with the given hash exists."""

    def __init__(self, commit):
        self.commit = commit
        shown = commit.hex() if isinstance(commit, (bytes, bytearray)) else str(commit)
        super().__init__(f"commit not found: {shown}")


class InvalidOperationError(EditError):
    """An operation or structure failed a consistency check."""

    def __init__(self, detail):
        self.detail = detail
        super().__init__(f"invalid operation: {detail}")


class StemNotFoundError(EditError):
    """The requested stem does not exist."""

    def __init__(self, stem_id):
        self.stem_id = stem_id
        super().__init__(f"stem {stem_id} not found")


class InvalidTrimRangeError(EditError):
    """A trim range is negative or empty."""

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(
            f"trim range invalid: start={_display_float(start)} end={_display_float(end)}"
        )


class GainOutOfRangeError(EditError):
    """A gain lies outside ±60 dB."""

    def __init__(self, db):
        self.db = db
        super().__init__(f"gain out of range: {_display_float(db)} dB (max ±60 dB)")


class PanOutOfRangeError(EditError):
    """A pan position lies outside -1.0..=1.0."""

    def __init__(self, position):
        self.position = position
        super().__init__(
            f"pan out of range: {_display_float(position)} (must be -1.0..=1.0)"
        )


class EqFreqOutOfRangeError(EditError):
    """An EQ centre frequency lies outside the audible range."""

    def __init__(self, freq_hz):
        self.freq_hz = freq_hz
        super().__init__(f"EQ frequency out of range: {_display_float(freq_hz)} Hz")


class NothingToRevertError(EditError):
    """There is no commit left to revert."""

    def __init__(self):
        super().__init__("history is empty, nothing to revert")


class SerializationError(EditError):
    """Data could not be serialized or deserialized."""

    def __init__(self, detail):
        self.detail = detail
        super().__init__(detail)