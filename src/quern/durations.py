"""Timedeltas as short strings like "1m30s", in the style of Go's Duration format."""
import datetime
import re

UNITS = {
    "h": datetime.timedelta(hours=1),
    "m": datetime.timedelta(minutes=1),
    "s": datetime.timedelta(seconds=1),
    "ms": datetime.timedelta(milliseconds=1),
}

DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")


def format_duration(val: datetime.timedelta) -> str:
    if val == datetime.timedelta():
        return "0"
    parts = []
    if val < datetime.timedelta():
        parts.append("-")
        val = -val
    for unit in ("h", "m"):
        whole, val = divmod(val, UNITS[unit])
        if whole:
            parts.append(f"{whole}{unit}")
    if val >= UNITS["s"]:
        seconds = val.total_seconds()
        parts.append(f"{int(seconds) if seconds.is_integer() else seconds}s")
    elif val:
        ms = val / UNITS["ms"]
        parts.append(f"{int(ms) if ms.is_integer() else ms}ms")
    return "".join(parts)


def parse_duration(val: str) -> datetime.timedelta:
    sign = 1
    if val[:1] in ("-", "+"):
        sign = -1 if val[0] == "-" else 1
        val = val[1:]
    if not val:
        raise ValueError("Empty duration string")
    if val == "0":
        return datetime.timedelta()
    accum = datetime.timedelta()
    pos = 0
    while pos < len(val):
        match = DURATION_PART.match(val, pos)
        if match is None:
            raise ValueError(f"Invalid duration string {val!r}")
        accum += float(match.group(1)) * UNITS[match.group(2)]
        pos = match.end()
    return sign * accum
