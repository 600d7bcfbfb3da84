"""Shared pytest fixtures for wattwise tests."""

import calendar
from datetime import date, datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from wattwise.models.plan import Plan, PlanFees, PlanWithCosts
from wattwise.models.usage import DateRange, MonthlyUsage, ParsedUsageData

ESPI_NS = "http://naesb.org/espi"
ATOM_NS = "http://www.w3.org/2005/Atom"


def _build_feed(blocks, namespaced=True):
    """Render interval blocks as a Green Button feed.

    ``blocks`` is a list of ``(start_epoch, duration, [values_wh])`` tuples.
    """
    p = "espi:" if namespaced else ""
    block_xml = []
    for start, duration, values in blocks:
        readings = "".join(
            f"<{p}IntervalReading><{p}value>{value}</{p}value></{p}IntervalReading>"
            for value in values
        )
        duration_xml = f"<{p}duration>{duration}</{p}duration>" if duration is not None else ""
        block_xml.append(
            f"<{p}IntervalBlock><{p}interval>{duration_xml}<{p}start>{start}</{p}start>"
            f"</{p}interval>{readings}</{p}IntervalBlock>"
        )

    ns_decl = f' xmlns="{ATOM_NS}" xmlns:espi="{ESPI_NS}"' if namespaced else ""
    return (
        f"<?xml version='1.0' encoding='UTF-8'?><feed{ns_decl}><entry><content>"
        f"<{p}MeterReading>{''.join(block_xml)}</{p}MeterReading>"
        f"</content></entry></feed>"
    )


def _daily_blocks(start: date, days: int, readings_per_day: int = 24, value_wh=1000):
    blocks = []
    for offset in range(days):
        day = datetime.combine(start + timedelta(days=offset), datetime.min.time(), timezone.utc)
        blocks.append((int(day.timestamp()), 86400, [value_wh] * readings_per_day))
    return blocks


@pytest.fixture
def feed_builder():
    """Factory rendering ``(start, duration, values)`` blocks as XML.

    Returns
    -------
    callable
        ``build(blocks, namespaced=True) -> str``
    """
    return _build_feed


@pytest.fixture
def daily_blocks():
    """Factory producing one block per day of hourly readings.

    Returns
    -------
    callable
        ``blocks(start, days, readings_per_day=24, value_wh=1000)``
    """
    return _daily_blocks


@pytest.fixture
def half_year_xml():
    """Hourly 1 kWh readings from 2024-01-01 through 2024-06-30.

    Returns
    -------
    str
        Namespaced Green Button feed
    """
    return _build_feed(_daily_blocks(date(2024, 1, 1), 182))


@pytest.fixture
def usage_factory():
    """Factory building ParsedUsageData from monthly totals.

    Returns
    -------
    callable
        ``make(totals, start_year=2024, start_month=1, days=None, quality="good")``
        where ``days`` defaults to the full length of each month
    """

    def make(totals, start_year=2024, start_month=1, days=None, quality="good"):
        months = []
        year, month = start_year, start_month
        for index, total in enumerate(totals):
            month_days = calendar.monthrange(year, month)[1]
            covered = month_days if days is None else days
            if isinstance(days, (list, tuple)):
                covered = days[index]
            months.append(
                MonthlyUsage(
                    month=f"{year:04d}-{month:02d}",
                    total_kwh=total,
                    days_with_data=covered,
                    average_daily=round(total / covered, 2) if covered else 0.0,
                )
            )
            month += 1
            if month > 12:
                year, month = year + 1, 1

        first, last = months[0], months[-1]
        date_range = DateRange(
            start=date(first.year, first.calendar_month, 1),
            end=date(
                last.year,
                last.calendar_month,
                calendar.monthrange(last.year, last.calendar_month)[1],
            ),
        )
        if len(months) < 6:
            return ParsedUsageData.model_construct(
                monthly_totals=months, data_quality=quality, date_range=date_range
            )
        return ParsedUsageData(monthly_totals=months, data_quality=quality, date_range=date_range)

    return make


@pytest.fixture
def example_usage(usage_factory):
    """January-June usage: 850, 780, 720, 680, 620, 580 kWh."""
    return usage_factory([850, 780, 720, 680, 620, 580])


@pytest.fixture
def plan_factory():
    """Factory building catalog plans.

    Returns
    -------
    callable
        ``make(plan_id, supplier="s1", rate=12.5, renewable=0, fees=(3.5, 5.0),
        rate_structure=None)``
    """

    def make(plan_id, supplier="s1", rate=12.5, renewable=0, fees=(3.5, 5.0), rate_structure=None):
        return Plan(
            id=plan_id,
            supplier_id=supplier,
            supplier_name=f"Supplier {supplier.upper()}",
            name=f"Plan {plan_id}",
            rate=rate,
            renewable_percentage=renewable,
            fees=PlanFees(delivery=fees[0], admin=fees[1]),
            rate_structure=rate_structure,
        )

    return make


@pytest.fixture
def scored_plan_factory(plan_factory):
    """Factory building PlanWithCosts with explicit savings and score."""

    def make(plan_id, supplier="s1", rate=12.5, renewable=0, savings=0.0, score=0.0, **kwargs):
        plan = plan_factory(plan_id, supplier=supplier, rate=rate, renewable=renewable, **kwargs)
        return PlanWithCosts.model_validate(
            {**dict(plan), "annual_cost": 1000.0, "savings": savings, "score": score}
        )

    return make


@pytest.fixture
def catalog_payload():
    """Camel-case plan catalog as it arrives over the wire.

    Returns
    -------
    list[dict]
        Four plans across three suppliers
    """
    return [
        {
            "id": "basic-12",
            "supplierId": "reliant",
            "supplierName": "Reliant Energy",
            "name": "Basic 12",
            "rate": 13.9,
            "renewablePercentage": 0,
            "fees": {"delivery": 3.5, "admin": 5.0},
        },
        {
            "id": "green-12",
            "supplierId": "green-mountain",
            "supplierName": "Green Mountain Energy",
            "name": "Pollution Free 12",
            "rate": 12.4,
            "renewablePercentage": 100,
            "fees": {"delivery": 3.5, "admin": 4.0},
        },
        {
            "id": "tiered-saver",
            "supplierId": "txu",
            "supplierName": "TXU Energy",
            "name": "Tiered Saver",
            "rate": 11.0,
            "renewablePercentage": 20,
            "fees": {"delivery": 3.5, "admin": 5.0},
            "rateStructure": {
                "type": "tiered",
                "tiers": [
                    {"minKwh": 0, "maxKwh": 500, "ratePerKwh": 8.0},
                    {"minKwh": 500, "maxKwh": 1000, "ratePerKwh": 12.0},
                    {"minKwh": 1000, "ratePerKwh": 15.0},
                ],
            },
        },
        {
            "id": "summer-smart",
            "supplierId": "txu",
            "supplierName": "TXU Energy",
            "name": "Summer Smart",
            "rate": 12.0,
            "renewablePercentage": 60,
            "fees": {"delivery": 3.5, "admin": 5.0},
            "rateStructure": {"type": "seasonal", "summerRate": 14.0, "winterRate": 9.5},
        },
    ]


@pytest.fixture
def recommendation_request(half_year_xml, catalog_payload):
    """Camel-case /recommendations body with an inline catalog."""
    return {
        "usageXml": half_year_xml,
        "currentPlan": {"supplier": "", "rate": 15.0},
        "preferences": {"costPriority": 70, "renewablePriority": 30},
        "plans": catalog_payload,
    }


# API Test Fixtures
@pytest.fixture
def app():
    """Create FastAPI app for testing.

    Returns
    -------
    FastAPI
        Test FastAPI application instance
    """
    from wattwise.api.main import create_app

    return create_app()


@pytest.fixture
def client(app):
    """Create test client for API testing.

    Parameters
    ----------
    app : FastAPI
        FastAPI application instance

    Returns
    -------
    TestClient
        FastAPI test client
    """
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings so environment changes take effect."""
    from wattwise.api.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
