"""Green Button interval feed parser.

Turns a feed -> entry -> content -> MeterReading -> IntervalBlock ->
IntervalReading document into monthly usage aggregates. Elements are matched
by local name, so ``espi:value``, ``{http://naesb.org/espi}value`` and a bare
``value`` all resolve.
"""

import logging
import math
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from datetime import datetime, timezone

from wattwise.config.constants import (
    EXPECTED_READINGS_PER_DAY,
    FAIR_COMPLETENESS_PCT,
    GOOD_COMPLETENESS_PCT,
    MIN_MONTHS_OF_HISTORY,
)
from wattwise.exceptions.errors import (
    InsufficientHistoryError,
    MalformedInputError,
    NoValidReadingsError,
)
from wattwise.models.usage import (
    DataQuality,
    DateRange,
    IntervalReading,
    MonthlyUsage,
    ParsedUsageData,
)
from wattwise.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60
WH_PER_KWH = 1000.0


def _local_name(tag) -> str:
    # Comments and processing instructions carry non-string tags
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1]


def _children(element: ET.Element | None, name: str) -> list[ET.Element]:
    if element is None:
        return []
    return [child for child in element if _local_name(child.tag) == name]


def _child(element: ET.Element | None, name: str) -> ET.Element | None:
    children = _children(element, name)
    return children[0] if children else None


def _child_text(element: ET.Element | None, name: str) -> str | None:
    child = _child(element, name)
    if child is None or child.text is None:
        return None
    return child.text.strip() or None


def _to_int(text: str | None) -> int | None:
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _to_float(text: str | None) -> float | None:
    if text is None:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _find_entries(root: ET.Element) -> list[ET.Element]:
    if _local_name(root.tag) == "entry":
        return [root]
    entries = _children(root, "entry")
    if not entries:
        raise MalformedInputError(
            "No entry elements found in usage feed. Expected feed/entry or a root entry",
            root=_local_name(root.tag),
        )
    return entries


def _find_interval_blocks(entry: ET.Element) -> list[ET.Element]:
    content = _child(entry, "content")
    if content is None:
        return []

    blocks = []
    for meter_reading in _children(content, "MeterReading"):
        blocks.extend(_children(meter_reading, "IntervalBlock"))
    blocks.extend(_children(content, "IntervalBlock"))
    return blocks


def _block_readings(block: ET.Element) -> list[IntervalReading]:
    interval = _child(block, "interval")
    block_start = _to_int(_child_text(interval, "start"))
    duration = _to_int(_child_text(interval, "duration"))

    raw_readings = _children(block, "IntervalReading")
    step = duration / len(raw_readings) if duration and raw_readings else 0

    readings = []
    for index, raw in enumerate(raw_readings):
        start = _to_int(_child_text(_child(raw, "timePeriod"), "start"))
        if start is None and block_start is not None:
            start = int(block_start + index * step)
        if start is None:
            continue

        value_wh = _to_float(_child_text(raw, "value"))
        if value_wh is None or value_wh <= 0:
            continue

        try:
            timestamp = datetime.fromtimestamp(start, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise MalformedInputError(f"Interval start out of range: {start}", start=start) from e

        readings.append(IntervalReading(timestamp=timestamp, kwh=value_wh / WH_PER_KWH))
    return readings


def extract_interval_readings(content: str | bytes) -> list[IntervalReading]:
    """Decode every positive interval reading in a usage feed.

    Parameters
    ----------
    content : str | bytes
        Raw XML document

    Returns
    -------
    list[IntervalReading]
        Readings in kWh, sorted by timestamp

    Raises
    ------
    MalformedInputError
        If the document is not XML or has no entry elements
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise MalformedInputError(f"Invalid XML format: {e}") from e

    readings = []
    for entry in _find_entries(root):
        for block in _find_interval_blocks(entry):
            readings.extend(_block_readings(block))

    readings.sort(key=lambda r: r.timestamp)
    logger.debug(f"Extracted {len(readings)} interval readings")
    return readings


def _utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def aggregate_monthly(readings: Iterable[IntervalReading]) -> list[MonthlyUsage]:
    """Bucket readings by UTC calendar month.

    Parameters
    ----------
    readings : Iterable[IntervalReading]
        Interval readings in any order

    Returns
    -------
    list[MonthlyUsage]
        Chronological monthly aggregates
    """
    buckets: dict[str, dict] = {}
    for reading in sorted(readings, key=lambda r: _utc(r.timestamp)):
        timestamp = _utc(reading.timestamp)
        bucket = buckets.setdefault(f"{timestamp:%Y-%m}", {"total": 0.0, "days": set()})
        bucket["total"] += reading.kwh
        bucket["days"].add(timestamp.date())

    return [
        MonthlyUsage(
            month=month,
            total_kwh=round_half_up(bucket["total"]),
            days_with_data=len(bucket["days"]),
            average_daily=round_half_up(bucket["total"] / len(bucket["days"])),
        )
        for month, bucket in sorted(buckets.items())
    ]


def assess_data_quality(readings: list[IntervalReading]) -> DataQuality:
    """Grade feed completeness assuming hourly readings.

    Parameters
    ----------
    readings : list[IntervalReading]
        Non-empty list of readings

    Returns
    -------
    DataQuality
        ``good`` at 80% or more, ``fair`` at 50% or more, else ``poor``
    """
    timestamps = [_utc(r.timestamp) for r in readings]
    span_seconds = (max(timestamps) - min(timestamps)).total_seconds()
    span_days = max(math.ceil(span_seconds / SECONDS_PER_DAY), 1)
    completeness = len(readings) / (span_days * EXPECTED_READINGS_PER_DAY) * 100

    logger.debug(f"Feed completeness {completeness:.1f}% over {span_days} days")

    if completeness >= GOOD_COMPLETENESS_PCT:
        return "good"
    if completeness >= FAIR_COMPLETENESS_PCT:
        return "fair"
    return "poor"


def parse_green_button_xml(content: str | bytes) -> ParsedUsageData:
    """Parse a Green Button usage feed into monthly usage data.

    Parameters
    ----------
    content : str | bytes
        Raw XML document

    Returns
    -------
    ParsedUsageData
        Monthly totals, quality tier and covered date range

    Raises
    ------
    MalformedInputError
        If the document cannot be parsed
    NoValidReadingsError
        If no positive reading survives filtering
    InsufficientHistoryError
        If fewer than six months are present
    """
    readings = extract_interval_readings(content)
    if not readings:
        raise NoValidReadingsError()

    monthly_totals = aggregate_monthly(readings)
    if len(monthly_totals) < MIN_MONTHS_OF_HISTORY:
        raise InsufficientHistoryError(len(monthly_totals), MIN_MONTHS_OF_HISTORY)

    data_quality = assess_data_quality(readings)
    date_range = DateRange(
        start=_utc(readings[0].timestamp).date(),
        end=_utc(readings[-1].timestamp).date(),
    )

    logger.info(
        f"Parsed {len(readings)} readings into {len(monthly_totals)} months "
        f"({date_range.start} to {date_range.end}, quality={data_quality})"
    )
    return ParsedUsageData(
        monthly_totals=monthly_totals,
        data_quality=data_quality,
        date_range=date_range,
    )
