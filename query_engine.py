"""Filtering, searching, sorting and paging of an owner's transactions."""

from dataclasses import dataclass, field
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from errors import ValidationError
from models import COLUMNS, Transaction, TransactionType, normalize_email

DEFAULT_PAGE_SIZE = 8
MAX_PAGE_SIZE = 100
# Keeps LIMIT/OFFSET well inside MySQL's BIGINT range.
MAX_PAGE = 1_000_000_000

# Request value -> column; sort columns never come straight from the request.
SORT_FIELDS = {'date': 'date', 'amount': 'amount'}
SORT_DIRECTIONS = {'asc': 'ASC', 'desc': 'DESC'}


class ListOptions(BaseModel):
    """Listing options. Validated from the query string by their request names
    (``q``, ``limit``, ``sort``, ``order``)."""
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[TransactionType] = None
    search_text: Optional[str] = Field(None, alias='q')
    page: PositiveInt = Field(1, le=MAX_PAGE)
    page_size: PositiveInt = Field(DEFAULT_PAGE_SIZE, alias='limit', le=MAX_PAGE_SIZE)
    sort_field: Literal['date', 'amount'] = Field('date', alias='sort')
    sort_direction: Literal['asc', 'desc'] = Field('desc', alias='order')

    @property
    def offset(self):
        return (self.page - 1) * self.page_size


@dataclass
class Page:
    items: list = field(default_factory=list)
    total: int = 0

    def to_dict(self):
        return {"data": [tx.to_dict() for tx in self.items], "total": self.total}


def parse_list_options(args, default_page_size=DEFAULT_PAGE_SIZE):
    """Build ``ListOptions`` from request query args (``type``, ``q``, ``page``,
    ``limit``, ``sort``, ``order``). Blank values fall back to the defaults."""
    raw = {key: value.strip() for key, value in args.items() if value and value.strip()}
    for key in ('type', 'sort', 'order'):
        if key in raw:
            raw[key] = raw[key].lower()
    if raw.get('type') == 'all':
        del raw['type']
    raw.setdefault('limit', default_page_size)
    return ListOptions.model_validate(raw)


def escape_like(text):
    return text.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def build_filter(owner_email, options):
    """Return the WHERE clause and its parameters for ``options``."""
    clauses = ["owner_email = %s"]
    params = [owner_email]

    if options.type:
        clauses.append("type = %s")
        params.append(options.type)

    if options.search_text:
        pattern = f"%{escape_like(options.search_text.lower())}%"
        clauses.append("(LOWER(category) LIKE %s OR LOWER(description) LIKE %s)")
        params.extend([pattern, pattern])

    return " AND ".join(clauses), params


def build_order_by(options):
    # created_at DESC breaks ties whatever the primary direction is.
    return (
        f"{SORT_FIELDS[options.sort_field]} {SORT_DIRECTIONS[options.sort_direction]}, "
        "created_at DESC, id DESC"
    )


def build_list_query(owner_email, options):
    """Return ``(count_sql, count_params, page_sql, page_params)``."""
    where, params = build_filter(owner_email, options)
    count_sql = f"SELECT COUNT(*) AS total FROM transactions WHERE {where}"
    page_sql = (
        f"SELECT {COLUMNS} FROM transactions WHERE {where} "
        f"ORDER BY {build_order_by(options)} LIMIT %s OFFSET %s"
    )
    return count_sql, tuple(params), page_sql, tuple(params + [options.page_size, options.offset])


def list_transactions(cur, owner_email, options=None):
    """Return one page of the owner's matching transactions plus the match count.

    ``cur`` is a dictionary cursor. Pages past the end come back empty.
    """
    owner_email = normalize_email(owner_email)
    if not owner_email:
        raise ValidationError("ownerEmail is required")
    options = options or ListOptions()

    count_sql, count_params, page_sql, page_params = build_list_query(owner_email, options)

    cur.execute(count_sql, count_params)
    row = cur.fetchone()
    total = int(row['total']) if row else 0
    if options.offset >= total:
        return Page(items=[], total=total)

    cur.execute(page_sql, page_params)
    items = [Transaction.from_row(r) for r in cur.fetchall()]
    return Page(items=items, total=total)
