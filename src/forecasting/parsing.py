"""
Wire Format Parsing

Builds engine records from JSON-style dicts using the same field names that
``to_dict`` produces. Raises ValueError naming the offending field.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from .models import (
    BalanceSnapshot,
    CashFlow,
    ForecasterOptions,
    SpendingTransaction,
    TimeSeriesPoint,
)


def _require(record: Dict[str, Any], key: str, context: str) -> Any:
    if not isinstance(record, dict):
        raise ValueError(f"{context} must be an object")
    if key not in record or record[key] is None:
        raise ValueError(f"{context}: '{key}' is required")
    return record[key]


def parse_timestamp(value: Any, context: str = "timestamp") -> datetime:
    """Parse an ISO-8601 date or datetime string"""
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        raise ValueError(f"{context}: invalid timestamp '{value}'")


def parse_number(value: Any, context: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{context}: expected a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{context}: expected a number, got {value!r}")


def parse_int(value: Any, context: str) -> int:
    number = parse_number(value, context)
    if not number.is_integer():
        raise ValueError(f"{context}: expected an integer, got {value!r}")
    return int(number)


def parse_numbers(values: Any, context: str) -> List[float]:
    if not isinstance(values, list):
        raise ValueError(f"{context} must be a list")
    return [parse_number(v, f"{context}[{i}]") for i, v in enumerate(values)]


def _parse_list(records: Any, context: str) -> List[Dict[str, Any]]:
    if not isinstance(records, list):
        raise ValueError(f"{context} must be a list")
    return records


def parse_points(records: Any) -> List[TimeSeriesPoint]:
    return [
        TimeSeriesPoint(
            timestamp=parse_timestamp(_require(r, 'timestamp', f"points[{i}]"), f"points[{i}]"),
            value=parse_number(_require(r, 'value', f"points[{i}]"), f"points[{i}].value")
        )
        for i, r in enumerate(_parse_list(records, "points"))
    ]


def parse_balance_history(records: Any) -> List[BalanceSnapshot]:
    return [
        BalanceSnapshot(
            timestamp=parse_timestamp(_require(r, 'timestamp', f"history[{i}]"), f"history[{i}]"),
            balance=parse_number(_require(r, 'balance', f"history[{i}]"), f"history[{i}].balance")
        )
        for i, r in enumerate(_parse_list(records, "history"))
    ]


def parse_cash_flows(records: Any) -> List[CashFlow]:
    flows = []
    for i, r in enumerate(_parse_list(records, "flows")):
        context = f"flows[{i}]"
        timestamp = parse_timestamp(_require(r, 'timestamp', context), context)
        inflow = parse_number(r.get('inflow', 0), f"{context}.inflow")
        outflow = parse_number(r.get('outflow', 0), f"{context}.outflow")
        if inflow < 0 or outflow < 0:
            raise ValueError(f"{context}: inflow and outflow must be non-negative")
        flows.append(CashFlow(timestamp=timestamp, inflow=inflow, outflow=outflow))
    return flows


def parse_transactions(records: Any) -> List[SpendingTransaction]:
    return [
        SpendingTransaction(
            timestamp=parse_timestamp(_require(r, 'timestamp', f"transactions[{i}]"), f"transactions[{i}]"),
            amount=parse_number(_require(r, 'amount', f"transactions[{i}]"), f"transactions[{i}].amount"),
            category=r.get('category') or None
        )
        for i, r in enumerate(_parse_list(records, "transactions"))
    ]


def parse_options(record: Optional[Dict[str, Any]]) -> ForecasterOptions:
    """Parse the optional ``options`` object; absent fields stay unset"""
    if record is None:
        return ForecasterOptions()
    if not isinstance(record, dict):
        raise ValueError("options must be an object")

    def optional(key, parser):
        value = record.get(key)
        return None if value is None else parser(value, f"options.{key}")

    return ForecasterOptions(
        seasonality_period=optional('seasonalityPeriod', parse_int),
        window_size=optional('windowSize', parse_int),
        confidence_level=optional('confidenceLevel', parse_number),
        adaptivity=optional('adaptivity', parse_number)
    )
