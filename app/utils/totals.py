# app/utils/totals.py
from typing import Any, Dict, Iterable, Optional

from app.models.transaction import TransactionType

def safe_float(val, default=0.0):
    try:
        if val is None:
            return default
        return float(val)
    except (TypeError, ValueError):
        return default

def calculate_totals(
    transactions: Iterable[Dict[str, Any]],
    decimal_places: Optional[int] = None,
) -> Dict[str, float]:
    """
    Reduce transactions to income, expense and balance.

    The sign of amount is ignored: the type alone decides which side an
    amount lands on, and types other than INCOME/EXPENSE are skipped.
    Amounts accumulate as floats; rounding only happens at the end and only
    when decimal_places is given.
    """
    income = 0.0
    expense = 0.0
    for tx in transactions:
        amount = abs(safe_float(tx.get("amount")))
        tx_type = tx.get("type")
        if tx_type == TransactionType.INCOME.value:
            income += amount
        elif tx_type == TransactionType.EXPENSE.value:
            expense += amount

    balance = income - expense
    if decimal_places is not None:
        income = round(income, decimal_places)
        expense = round(expense, decimal_places)
        balance = round(balance, decimal_places)
    return {"income": income, "expense": expense, "balance": balance}
