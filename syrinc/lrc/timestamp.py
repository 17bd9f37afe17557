from __future__ import annotations

from dataclasses import dataclass
import logging
import re

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"-?[0-9]+")
_DIGITS = "0123456789"


@dataclass(frozen=True, slots=True)
class TimestampComponents:
    is_negative: bool
    mm: int
    ss: int
    cs: int


def is_timestamp(text: str) -> bool:
    """
    Lexical check for mm:ss.cc (exactly one ':' and one '.', digits otherwise,
    optional leading '-'). Ranges are not checked: "999:999.999" passes.
    """
    if not text:
        return False
    if text.count(":") != 1 or text.count(".") != 1:
        return False
    body = text[1:] if text[0] == "-" else text
    return all(c in _DIGITS or c in ":." for c in body)


def is_numeric_only(text: str) -> bool:
    # "" counts as numeric, callers treat it as 0
    for i, c in enumerate(text):
        if c in _DIGITS or c == ".":
            continue
        if i == 0 and c == "-":
            continue
        return False
    return True


def leading_int(text: str) -> int | None:
    # "-150" -> -150, "7.5" -> 7, "abc" -> None
    m = _LEADING_INT_RE.match(text.strip())
    return int(m.group(0)) if m else None


def _field(text: str) -> int:
    # empty or non-digit fields read as zero
    value = leading_int(text)
    return value if value is not None and value >= 0 else 0


@dataclass(frozen=True, slots=True)
class Timestamp:
    duration: int = 0  # ms, signed

    def __post_init__(self):
        # Timestamp("00:02.00") parses, Timestamp(2000) is taken as ms
        if isinstance(self.duration, str):
            object.__setattr__(self, "duration", Timestamp.parse(self.duration).duration)

    @classmethod
    def parse(cls, text: str, disable_warning: bool = False) -> "Timestamp":
        """
        Forgiving mm:ss.cc parser.

        Non-timestamps give the zero timestamp. Seconds >= 60 or centiseconds >= 100
        are rebalanced through the millisecond total ("00:75.00" -> "01:15.00")
        and reported as a warning, never as an error.
        """
        if not is_timestamp(text):
            return cls(0)

        is_negative = text[0] == "-"
        body = text[1:] if is_negative else text
        colon = body.index(":")
        dot = body.index(".")

        mm = _field(body[:colon])
        ss = _field(body[colon + 1 :])
        cs = _field(body[dot + 1 :])

        magnitude = mm * 60_000 + ss * 1_000 + cs * 10
        ts = cls(-magnitude if is_negative else magnitude)

        if (ss >= 60 or cs >= 100) and not disable_warning:
            logger.warning("%s timestamp is malformed; will round up to %s", text, ts.to_string())
        return ts

    def to_milliseconds(self) -> int:
        return self.duration

    def components(self) -> TimestampComponents:
        remaining = self.duration
        is_negative = False
        if remaining < 0:
            remaining = -remaining
            is_negative = True

        mm, remaining = divmod(remaining, 60_000)
        ss, remaining = divmod(remaining, 1_000)
        return TimestampComponents(is_negative, mm, ss, remaining // 10)

    def to_string(self, no_padding: bool = False) -> str:
        ts = self.components()
        sign = "-" if ts.is_negative else ""
        if no_padding:
            return f"{sign}{ts.mm}:{ts.ss}.{ts.cs}"
        return f"{sign}{ts.mm:02d}:{ts.ss:02d}.{ts.cs:02d}"

    def apply_offset(self, offset_ms: int, invert: bool = False) -> "Timestamp":
        """
        Subtract the offset (add it when inverted), clamping at zero.

        Players read a positive [offset] as "show earlier", so a positive
        offset moves timestamps back by default.
        """
        new_ms = self.duration - offset_ms * (-1 if invert else 1)
        return Timestamp(max(new_ms, 0))

    def __str__(self) -> str:
        return self.to_string()
