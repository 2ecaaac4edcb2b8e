"""
seeder/validators/field_coercion.py

Total conversions from raw CSV strings to typed store values.

None of these functions raise. A numeric value that cannot be parsed, blank
included, degrades to 0 and reports a ``coercion_failed`` warning. A blank
timestamp is silently invalid; a non-blank unparseable one also warns.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from seeder.domain.entity_spec import FieldKind, FieldSpec
from seeder.reporting import Reporter, default_reporter

TRUTHY_TOKENS = frozenset({"true", "1", "t", "True"})

TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
)

INVALID_TIMESTAMP: datetime | None = None

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_EPOCH_MILLIS = re.compile(r"-?\d{11,14}")


def to_boolean(value: str | None) -> bool:
    """
    True only for the recognized truthy tokens; everything else is False.
    """

    return value in TRUTHY_TOKENS


def to_int(value: str | None, *, field: str | None = None, reporter: Reporter | None = None) -> int:
    """
    Parse the leading base-10 integer of ``value`` (``"19.99"`` gives 19).
    """

    match = _INT_PREFIX.match(value or "")
    if match is None:
        _report_failure(reporter, field=field, value=value, kind=FieldKind.INTEGER, fallback=0)
        return 0
    return int(match.group(1))


def to_float(
    value: str | None,
    *,
    field: str | None = None,
    reporter: Reporter | None = None,
) -> float:
    """
    Parse the leading decimal number of ``value`` (``"7.5%"`` gives 7.5).
    """

    match = _FLOAT_PREFIX.match(value or "")
    if match is None:
        _report_failure(reporter, field=field, value=value, kind=FieldKind.FLOAT, fallback=0.0)
        return 0.0
    return float(match.group(1))


def to_timestamp(
    value: str | None,
    *,
    field: str | None = None,
    reporter: Reporter | None = None,
) -> datetime | None:
    """
    Parse a date/time string into a timezone-aware UTC datetime.

    Returns ``INVALID_TIMESTAMP`` for blank or unparseable input. Naive values
    are interpreted as UTC. Integers of 11-14 digits are epoch milliseconds.
    """

    raw = (value or "").strip()
    if not raw:
        return INVALID_TIMESTAMP

    parsed = _parse_timestamp(raw)
    if parsed is None:
        _report_failure(reporter, field=field, value=value, kind=FieldKind.TIMESTAMP, fallback=None)
        return INVALID_TIMESTAMP
    return parsed


def coerce_field(
    spec: FieldSpec,
    value: str | None,
    *,
    now: datetime,
    reporter: Reporter | None = None,
) -> tuple[bool, Any]:
    """
    Coerce one raw field according to its spec.

    Returns ``(present, value)``. ``present`` is False only for a non-optional
    timestamp that could not be parsed; the field is then left out of the
    record so the store default or the existing value applies. Optional
    timestamps that are blank or invalid resolve to ``now``.
    """

    if spec.kind == FieldKind.BOOLEAN:
        return True, to_boolean(value)
    if spec.kind == FieldKind.INTEGER:
        return True, to_int(value, field=spec.column, reporter=reporter)
    if spec.kind == FieldKind.FLOAT:
        return True, to_float(value, field=spec.column, reporter=reporter)
    if spec.kind == FieldKind.TIMESTAMP:
        if spec.optional and not (value or "").strip():
            return True, now
        parsed = to_timestamp(value, field=spec.column, reporter=reporter)
        if parsed is INVALID_TIMESTAMP:
            return (True, now) if spec.optional else (False, None)
        return True, parsed
    return True, value if value is not None else ""


def _parse_timestamp(raw: str) -> datetime | None:
    if _EPOCH_MILLIS.fullmatch(raw):
        try:
            return datetime.fromtimestamp(int(raw) / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    normalized = raw[:-1] + "+00:00" if raw.endswith(("Z", "z")) else raw
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        parsed = None
    if parsed is not None:
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def _report_failure(
    reporter: Reporter | None,
    *,
    field: str | None,
    value: str | None,
    kind: str,
    fallback: Any,
) -> None:
    (reporter or default_reporter).warning(
        "coercion_failed",
        field=field,
        kind=kind,
        value=value,
        fallback=fallback,
    )
