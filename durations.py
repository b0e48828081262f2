import re
import datetime as dt

# nanoseconds per unit
UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT = re.compile(r"(\d*)(?:\.(\d*))?([^\d.]+)")
_MICRO = dt.timedelta(microseconds=1)

# durations are int64 nanoseconds, about 2562047h either way
MAX_NS = 2**63 - 1


class InvalidDurationError(ValueError):
    pass


def parse_duration(text):
    """
    Parse a duration string such as "5m", "1h30m", "1.5h" or "300ms".

    A duration is an optionally signed sequence of decimal numbers, each with
    an optional fraction and a unit suffix. Raises InvalidDurationError for
    anything else.
    """
    if text is None:
        raise InvalidDurationError("invalid duration: None")
    orig = text
    negative = False
    if text[:1] in ("-", "+"):
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return dt.timedelta(0)
    if not text:
        raise InvalidDurationError(f"invalid duration {orig!r}")

    total_ns = 0
    pos = 0
    while pos < len(text):
        m = _COMPONENT.match(text, pos)
        if not m:
            raise InvalidDurationError(f"invalid duration {orig!r}")
        whole, frac, unit = m.group(1), m.group(2) or "", m.group(3)
        if not whole and not frac:
            raise InvalidDurationError(f"invalid duration {orig!r}")
        if unit not in UNITS:
            raise InvalidDurationError(f"unknown unit {unit!r} in duration {orig!r}")
        scale = UNITS[unit]
        total_ns += int(whole or "0") * scale
        if frac:
            total_ns += int(frac) * scale // (10 ** len(frac))
        if total_ns > MAX_NS:
            raise InvalidDurationError(f"invalid duration {orig!r}: out of range")
        pos = m.end()

    if negative:
        total_ns = -total_ns
    return dt.timedelta(microseconds=total_ns / 1000)


def round_duration(value, unit=dt.timedelta(minutes=1)):
    # halfway values round away from zero
    step = unit // _MICRO
    if step <= 0:
        return value
    us = value // _MICRO
    q, r = divmod(abs(us), step)
    if r * 2 >= step:
        q += 1
    rounded = q * step
    return dt.timedelta(microseconds=-rounded if us < 0 else rounded)


def format_duration(value):
    """Render a timedelta compactly, e.g. "0s", "5m0s", "1h30m0s", "250ms"."""
    us = value // _MICRO
    if us == 0:
        return "0s"
    sign = "-" if us < 0 else ""
    us = abs(us)

    if us < 1_000:
        return f"{sign}{us}µs"
    if us < 1_000_000:
        whole, rem = divmod(us, 1_000)
        return f"{sign}{_trim(whole, rem, 3)}ms"

    secs, frac = divmod(us, 1_000_000)
    hours, rem = divmod(secs, 3600)
    minutes, seconds = divmod(rem, 60)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + f"{_trim(seconds, frac, 6)}s"


def _trim(whole, frac, digits):
    if not frac:
        return str(whole)
    return f"{whole}.{frac:0{digits}d}".rstrip("0")
