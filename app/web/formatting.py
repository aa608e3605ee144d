# app/web/formatting.py
"""Display rules for the transactions page."""
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Union

from app.schemas.transaction import coerce_amount


def total_balance(transactions: Iterable[Mapping[str, Any]]) -> float:
    """Income adds, anything else subtracts, folded over the list in order."""
    balance = 0.0
    for tx in transactions:
        amount = coerce_amount(tx.get("amount"))
        balance = balance + amount if tx.get("type") == "income" else balance - amount
    return balance


def format_money(value: Union[int, float]) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):.2f}"


def format_amount(tx: Mapping[str, Any]) -> str:
    sign = "+" if tx.get("type") == "income" else "-"
    return f"{sign}${coerce_amount(tx.get('amount')):.2f}"


def category_label(tx: Mapping[str, Any]) -> str:
    return tx.get("category") or "Uncategorized"


def format_date(value: Any) -> str:
    """M/D/YYYY for anything ISO 8601 shaped, "No date" when absent."""
    if not value:
        return "No date"
    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        text = str(value).strip()
        try:
            day = datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            return text
    return f"{day.month}/{day.day}/{day.year}"


def amount_class(tx: Mapping[str, Any]) -> str:
    return "income" if tx.get("type") == "income" else "expense"
