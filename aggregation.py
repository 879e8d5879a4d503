"""Monthly category reports and all-time owner totals."""

import re
from datetime import date
from decimal import Decimal

from errors import ValidationError
from models import CENTS, normalize_email

MONTH_KEY = re.compile(r"(\d{4})-(\d{2})")


def month_window(month_key):
    """Return ``(start, end)`` for a ``YYYY-MM`` key; ``end`` is exclusive."""
    match = MONTH_KEY.fullmatch((month_key or '').strip()) if isinstance(month_key, str) else None
    if not match:
        raise ValidationError("Month is required in YYYY-MM format")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise ValidationError("Month is required in YYYY-MM format")

    start = date(year, month, 1)
    try:
        if month == 12:
            end = date(year + 1, 1, 1)
        else:
            end = date(year, month + 1, 1)
    except ValueError:
        # 9999-12 has no following month in the calendar range.
        raise ValidationError("Month is out of range")
    return start, end


def _money(value):
    return float(Decimal(value).quantize(CENTS))


def fold_month_rows(rows):
    """Fold ``(category, type, total)`` rows into the report shape."""
    by_category = {}
    totals = {'income': Decimal('0'), 'expense': Decimal('0')}

    for row in rows:
        amount = Decimal(str(row['total'] or 0))
        by_category[row['category']] = by_category.get(row['category'], Decimal('0')) + amount
        if row['type'] in totals:
            totals[row['type']] += amount

    categories = sorted(by_category.items(), key=lambda item: (-item[1], item[0]))
    total_income = _money(totals['income'])
    total_expense = _money(totals['expense'])

    return {
        "byCategory": [{"name": name, "value": _money(value)} for name, value in categories],
        "monthly": [
            {"category": "Income", "income": total_income, "expense": 0},
            {"category": "Expense", "income": 0, "expense": total_expense},
        ],
        "totalIncome": total_income,
        "totalExpense": total_expense,
    }


def summarize_by_month(cur, month_key, owner_email=None):
    start, end = month_window(month_key)

    sql = "SELECT category, type, SUM(amount) AS total FROM transactions WHERE date >= %s AND date < %s"
    params = [start, end]
    owner_email = normalize_email(owner_email)
    if owner_email:
        sql += " AND owner_email = %s"
        params.append(owner_email)
    sql += " GROUP BY category, type"

    cur.execute(sql, tuple(params))
    return fold_month_rows(cur.fetchall())


def fold_type_totals(rows):
    income = Decimal('0')
    expense = Decimal('0')
    for row in rows:
        if row['type'] == 'income':
            income = Decimal(str(row['total'] or 0))
        elif row['type'] == 'expense':
            expense = Decimal(str(row['total'] or 0))
    return {
        "income": _money(income),
        "expense": _money(expense),
        "balance": _money(income - expense),
    }


def summarize_owner_totals(cur, owner_email):
    owner_email = normalize_email(owner_email)
    if not owner_email:
        raise ValidationError("ownerEmail is required")

    cur.execute(
        "SELECT type, SUM(amount) AS total FROM transactions WHERE owner_email = %s GROUP BY type",
        (owner_email,)
    )
    return fold_type_totals(cur.fetchall())
