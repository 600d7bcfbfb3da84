# ruff: noqa: T201

"""
CLI module for wattwise.

Analyse a Green Button usage file, or recommend plans from a catalog file,
from the command line. ``serve`` starts the REST API.
"""

import argparse
import json
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from pydantic import ValidationError

from wattwise.exceptions.errors import WattwiseError
from wattwise.models.catalog import CatalogSnapshot
from wattwise.models.plan import Supplier
from wattwise.models.preferences import CurrentPlanData, UserPreferences
from wattwise.services.parser import parse_green_button_xml
from wattwise.services.recommender import generate_recommendations
from wattwise.services.validation import (
    calculate_data_quality_score,
    confidence_from_score,
    get_warning_actions,
    validate_usage_data,
)
from wattwise.utils.logging_config import init_console_logging, logging

# get wattwise_version dynamically
try:
    wattwise_version = version("wattwise")
except PackageNotFoundError:
    wattwise_version = "unknown"


def _read_catalog(path: str) -> CatalogSnapshot:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"plans": data}
    return CatalogSnapshot.model_validate(data)


def _read_suppliers(path: str) -> list[Supplier]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return [Supplier.model_validate(item) for item in data]


def _print_analysis(usage_path: str) -> None:
    usage = parse_green_button_xml(Path(usage_path).read_bytes())
    validation = validate_usage_data(usage)
    score = calculate_data_quality_score(usage)

    print(f"Usage: {usage.date_range.start} to {usage.date_range.end} ({usage.data_quality})")
    for month in usage.monthly_totals:
        print(
            f"- {month.month}: {month.total_kwh:.2f} kWh over {month.days_with_data} days "
            f"({month.average_daily:.2f} kWh/day)"
        )
    print(f"Quality score: {score} ({confidence_from_score(score)} confidence)")

    for error in validation.errors:
        print(f"ERROR: {error}")
    for action in get_warning_actions(validation.warnings):
        print(f"[{action.severity}] {action.warning}\n    {action.action}")


def _print_recommendations(args: argparse.Namespace) -> None:
    usage = parse_green_button_xml(Path(args.usage).read_bytes())
    validate_usage_data(usage).raise_for_errors()

    catalog = _read_catalog(args.catalog)
    suppliers = _read_suppliers(args.suppliers) if args.suppliers else catalog.suppliers

    preferences = UserPreferences(
        cost_priority=args.cost_priority,
        renewable_priority=100 - args.cost_priority
        if args.renewable_priority is None
        else args.renewable_priority,
    )
    current_plan = CurrentPlanData(
        supplier=args.current_supplier,
        rate=args.current_rate,
        contract_end_date=args.contract_end,
        early_termination_fee=args.etf,
    )

    recommendations = generate_recommendations(
        current_plan, usage, preferences, catalog.plans, suppliers
    )

    for rank, recommendation in enumerate(recommendations, start=1):
        plan = recommendation.plan
        print(f"{rank}. {plan.name} ({plan.supplier_name})")
        print(f"   Annual cost: ${plan.annual_cost:.2f}  Savings: ${plan.savings:.2f}")
        print(f"   {recommendation.explanation}")
        for scenario in getattr(plan, "scenarios", []):
            print(
                f"   - {scenario.description}: ${scenario.annual_cost:.2f} "
                f"(net ${scenario.net_savings:.2f})"
            )
        print(f"   Confidence: {recommendation.confidence}")
        print(f"   Sign up: {recommendation.signup_url}")


def run_cli() -> None:
    """Run the command-line interface for wattwise."""
    parser = argparse.ArgumentParser(description="wattwise CLI")
    parser.add_argument("--version", action="version", version=f"wattwise CLI v{wattwise_version}")
    parser.add_argument(
        "-log",
        "--log-level",
        default="warning",
        help="Set log level (e.g., debug, info, warning, error)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser("analyze", help="Analyse a usage file")
    analyze_parser.add_argument("usage", help="Green Button XML usage file")

    recommend_parser = subparsers.add_parser("recommend", help="Recommend plans")
    recommend_parser.add_argument("usage", help="Green Button XML usage file")
    recommend_parser.add_argument("-c", "--catalog", required=True, help="Plan catalog JSON file")
    recommend_parser.add_argument("--suppliers", help="Supplier ratings JSON file")
    recommend_parser.add_argument(
        "--cost-priority", type=float, default=50.0, help="Cost priority 0-100 (default: 50)"
    )
    recommend_parser.add_argument(
        "--renewable-priority",
        type=float,
        help="Renewable priority 0-100 (default: 100 - cost priority)",
    )
    recommend_parser.add_argument("--current-supplier", default="", help="Current supplier name")
    recommend_parser.add_argument(
        "--current-rate", type=float, required=True, help="Current rate in cents/kWh"
    )
    recommend_parser.add_argument("--contract-end", help="Contract end date (MM/YYYY)")
    recommend_parser.add_argument("--etf", type=float, help="Early termination fee in dollars")

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument(
        "--host",
        help="Host to bind to (default: WATTWISE_API_HOST or 127.0.0.1)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        help="Port to bind to (default: WATTWISE_API_PORT or 8000)",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        default=None,
        help="Enable auto-reload for development (default: WATTWISE_API_RELOAD)",
    )
    serve_parser.add_argument(
        "--workers",
        type=int,
        help="Number of worker processes (default: WATTWISE_API_WORKERS or 1)",
    )

    args = parser.parse_args()

    if not getattr(logging, args.log_level.upper(), None):
        print(f"Invalid log level: {args.log_level}")
        sys.exit(1)
    init_console_logging(args.log_level.upper())

    if args.command == "serve":
        from wattwise.api.server import run_server

        run_server(
            host=args.host,
            port=args.port,
            reload=args.reload,
            workers=args.workers,
        )
        return

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "analyze":
            _print_analysis(args.usage)
        else:
            _print_recommendations(args)
    except WattwiseError as error:
        print(error)
        sys.exit(1)
    except ValidationError as error:
        print(f"Invalid input: {error}")
        sys.exit(1)
    except json.JSONDecodeError as error:
        print(f"Invalid JSON: {error}")
        sys.exit(1)
    except OSError as error:
        print(f"Cannot read file: {error}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    run_cli()
