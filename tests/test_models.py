"""
Test suite for transaction payload validation and serialization.
"""

import pytest
from datetime import date
from decimal import Decimal

import pydantic

from errors import schema_error_message
from models import Transaction, TransactionCreate, TransactionUpdate
from tests.conftest import make_row


def valid_payload(**overrides):
    payload = {
        'type': 'expense',
        'category': 'Food',
        'amount': 50.5,
        'description': ' Lunch ',
        'date': '2024-03-15',
        'ownerEmail': 'Alice@Example.com ',
        'ownerName': 'Alice',
    }
    payload.update(overrides)
    return payload


def create_error(**overrides):
    with pytest.raises(pydantic.ValidationError) as exc:
        TransactionCreate.model_validate(valid_payload(**overrides))
    return schema_error_message(exc.value)


class TestAmount:
    """Amounts must be positive and fit DECIMAL(12,2)."""

    @pytest.mark.parametrize('value', [0, -1, '-20.00'])
    def test_non_positive_amount_rejected(self, value):
        assert 'greater than 0' in create_error(amount=value)

    @pytest.mark.parametrize('value', ['abc', None, True, float('nan'), float('inf'), 'Infinity', [5]])
    def test_non_numeric_amount_rejected(self, value):
        create_error(amount=value)

    @pytest.mark.parametrize('value', ['1e30', '12345678901.00', 10000000000])
    def test_amount_too_large_for_column(self, value):
        create_error(amount=value)

    def test_largest_amount_accepted(self):
        tx = TransactionCreate.model_validate(valid_payload(amount='9999999999.99'))
        assert tx.amount == Decimal('9999999999.99')

    @pytest.mark.parametrize('value', ['10.005', 0.001])
    def test_more_than_cents_rejected(self, value):
        create_error(amount=value)

    def test_decimal_amount_kept(self):
        assert TransactionCreate.model_validate(valid_payload(amount=50.5)).amount == Decimal('50.5')

    def test_numeric_string_accepted(self):
        assert TransactionCreate.model_validate(valid_payload(amount=' 1200 ')).amount == Decimal('1200')


class TestTypeAndDate:
    def test_type_normalized_to_lowercase(self):
        assert TransactionCreate.model_validate(valid_payload(type='Income')).type == 'income'

    @pytest.mark.parametrize('value', ['transfer', '', None, 1])
    def test_invalid_type_rejected(self, value):
        assert create_error(type=value) == 'Type must be income or expense'

    def test_plain_date(self):
        assert TransactionCreate.model_validate(valid_payload(date='2024-02-29')).date == date(2024, 2, 29)

    def test_iso_timestamp_keeps_date_part(self):
        tx = TransactionCreate.model_validate(valid_payload(date='2024-03-01T15:45:00.000Z'))
        assert tx.date == date(2024, 3, 1)

    @pytest.mark.parametrize('value', ['2024-02-30', 'yesterday', '', None, 20240301])
    def test_invalid_date_rejected(self, value):
        assert create_error(date=value) == 'Please provide a valid date'


class TestTransactionCreate:
    def test_valid_payload_normalized(self):
        values = TransactionCreate.model_validate(valid_payload()).model_dump()
        assert values == {
            'type': 'expense',
            'category': 'Food',
            'amount': Decimal('50.5'),
            'description': 'Lunch',
            'date': date(2024, 3, 15),
            'owner_email': 'alice@example.com',
            'owner_name': 'Alice',
        }

    def test_legacy_email_and_name_fields(self):
        payload = valid_payload(email='bob@example.com', name='Bob')
        del payload['ownerEmail']
        del payload['ownerName']
        tx = TransactionCreate.model_validate(payload)
        assert tx.owner_email == 'bob@example.com'
        assert tx.owner_name == 'Bob'

    def test_description_defaults_to_empty(self):
        payload = valid_payload()
        del payload['description']
        assert TransactionCreate.model_validate(payload).description == ''

    def test_null_description_is_empty(self):
        assert TransactionCreate.model_validate(valid_payload(description=None)).description == ''

    @pytest.mark.parametrize('field', ['type', 'category', 'amount', 'date', 'ownerEmail'])
    def test_required_fields(self, field):
        payload = valid_payload()
        del payload[field]
        with pytest.raises(pydantic.ValidationError):
            TransactionCreate.model_validate(payload)

    @pytest.mark.parametrize('value', ['   ', 'x' * 101, 42])
    def test_bad_category_rejected(self, value):
        assert create_error(category=value).startswith('category')

    def test_blank_owner_rejected(self):
        create_error(ownerEmail='  ')


class TestTransactionUpdate:
    def test_only_sent_fields_returned(self):
        assert TransactionUpdate.model_validate({'amount': '75', 'category': 'Rent'}).columns() == {
            'category': 'Rent',
            'amount': Decimal('75'),
        }

    def test_immutable_fields_ignored(self):
        updates = TransactionUpdate.model_validate({
            'id': 99,
            'createdAt': '2020-01-01T00:00:00',
            'updatedAt': '2020-01-01T00:00:00',
            'description': 'Updated',
        }).columns()
        assert updates == {'description': 'Updated'}

    def test_owner_email_updatable(self):
        updates = TransactionUpdate.model_validate({'ownerEmail': ' Bob@Example.com'}).columns()
        assert updates == {'owner_email': 'bob@example.com'}

    def test_blank_owner_email_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            TransactionUpdate.model_validate({'ownerEmail': ''})

    def test_invalid_type_rejected(self):
        with pytest.raises(pydantic.ValidationError) as exc:
            TransactionUpdate.model_validate({'type': 'refund'})
        assert schema_error_message(exc.value) == 'Type must be income or expense'

    @pytest.mark.parametrize('field', ['category', 'amount', 'date', 'type'])
    def test_null_required_column_rejected(self, field):
        with pytest.raises(pydantic.ValidationError):
            TransactionUpdate.model_validate({field: None})

    def test_name_alias(self):
        assert TransactionUpdate.model_validate({'name': 'Alice B.'}).columns() == {'owner_name': 'Alice B.'}

    def test_empty_update(self):
        assert TransactionUpdate.model_validate({}).columns() == {}


class TestTransactionSerialization:
    def test_to_dict(self):
        tx = Transaction.from_row(make_row())
        assert tx.to_dict() == {
            'id': 1,
            'type': 'expense',
            'category': 'Food',
            'amount': 50.5,
            'description': 'Lunch',
            'date': '2024-03-15',
            'ownerEmail': 'alice@example.com',
            'ownerName': 'Alice',
            'createdAt': '2024-03-15T12:30:00',
            'updatedAt': '2024-03-15T12:30:00',
        }

    def test_null_description_becomes_empty(self):
        tx = Transaction.from_row(make_row(description=None, owner_name=None))
        assert tx.description == ''
        assert tx.owner_name == ''

    def test_missing_timestamps(self):
        row = make_row()
        del row['created_at']
        del row['updated_at']
        data = Transaction.from_row(row).to_dict()
        assert data['createdAt'] is None
        assert data['updatedAt'] is None
