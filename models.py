from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints, condecimal, field_validator

TRANSACTION_TYPES = ('income', 'expense')
CENTS = Decimal('0.01')

TransactionType = Literal['income', 'expense']
# Fits the DECIMAL(12,2) column: at most 9999999999.99.
Amount = condecimal(gt=0, max_digits=12, decimal_places=2)
Category = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
OwnerEmail = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1, max_length=255)]
OwnerName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)]
TransactionDate = date

COLUMNS = (
    "id, type, category, amount, description, date, "
    "owner_email, owner_name, created_at, updated_at"
)


@dataclass
class Transaction:
    id: int
    type: str
    category: str
    amount: Decimal
    description: str
    date: date
    owner_email: str
    owner_name: str = ''
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row['id'],
            type=row['type'],
            category=row['category'],
            amount=Decimal(str(row['amount'])),
            description=row.get('description') or '',
            date=row['date'],
            owner_email=row['owner_email'],
            owner_name=row.get('owner_name') or '',
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at'),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "category": self.category,
            "amount": float(self.amount),
            "description": self.description,
            "date": self.date.isoformat(),
            "ownerEmail": self.owner_email,
            "ownerName": self.owner_name,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


def normalize_email(value):
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip().lower()


class TransactionFields(BaseModel):
    """Input normalisation shared by the create and update payloads.

    Field names match the ``transactions`` columns, so ``model_dump()`` gives
    the values to write. Unknown keys (``id``, ``createdAt``...) are ignored.
    """
    model_config = ConfigDict(extra='ignore')

    @field_validator('type', mode='before', check_fields=False)
    @classmethod
    def normalize_type(cls, value):
        if isinstance(value, str) and value.strip().lower() in TRANSACTION_TYPES:
            return value.strip().lower()
        raise ValueError("Type must be income or expense")

    @field_validator('amount', mode='before', check_fields=False)
    @classmethod
    def amount_is_number(cls, value):
        if value is None or isinstance(value, bool):
            raise ValueError("Amount must be a number")
        if isinstance(value, float):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator('date', mode='before', check_fields=False)
    @classmethod
    def parse_date(cls, value):
        # ``YYYY-MM-DD`` or a full ISO-8601 timestamp, whose date part is kept.
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Please provide a valid date")
        value = value.strip()
        try:
            if len(value) == 10:
                return date.fromisoformat(value)
            return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
        except ValueError:
            raise ValueError("Please provide a valid date")

    @field_validator('description', 'owner_name', mode='before', check_fields=False)
    @classmethod
    def none_is_empty(cls, value):
        return '' if value is None else value


class TransactionCreate(TransactionFields):
    type: TransactionType
    category: Category
    amount: Amount
    description: Description = ''
    date: TransactionDate
    owner_email: OwnerEmail = Field(validation_alias=AliasChoices('ownerEmail', 'email'))
    owner_name: OwnerName = Field('', validation_alias=AliasChoices('ownerName', 'name'))


class TransactionUpdate(TransactionFields):
    """Partial update. ``id`` and ``createdAt`` are never written; a field sent
    as ``null`` is rejected rather than cleared."""
    type: TransactionType = None
    category: Category = None
    amount: Amount = None
    description: Description = None
    date: TransactionDate = None
    owner_email: OwnerEmail = Field(None, validation_alias=AliasChoices('ownerEmail', 'email'))
    owner_name: OwnerName = Field(None, validation_alias=AliasChoices('ownerName', 'name'))

    def columns(self):
        return self.model_dump(exclude_unset=True)
