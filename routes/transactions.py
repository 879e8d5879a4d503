from flask import Blueprint, request, jsonify, current_app

from aggregation import summarize_owner_totals
from auth_utils import owner_email_from_request, owner_required
from errors import NotFoundError, StoreError, ValidationError
from models import COLUMNS, Transaction, TransactionCreate, TransactionUpdate
from query_engine import list_transactions, parse_list_options

transactions_bp = Blueprint('transactions', __name__, url_prefix='/api/transactions')


def parse_id(raw_id):
    try:
        tx_id = int(raw_id)
    except ValueError:
        raise StoreError("Invalid id", status_code=400)
    if tx_id < 1:
        raise StoreError("Invalid id", status_code=400)
    return tx_id


def json_body():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def fetch_transaction(cur, tx_id, owner_email=None):
    sql = f"SELECT {COLUMNS} FROM transactions WHERE id=%s"
    params = [tx_id]
    if owner_email:
        sql += " AND owner_email=%s"
        params.append(owner_email)
    cur.execute(sql, tuple(params))
    row = cur.fetchone()
    if not row:
        raise NotFoundError()
    return Transaction.from_row(row)


@transactions_bp.route('', methods=['POST'])
def create_transaction():
    values = TransactionCreate.model_validate(json_body()).model_dump()

    conn = current_app.store.get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            cur.execute(
                "INSERT INTO transactions (type, category, amount, description, date, owner_email, owner_name) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s)",
                (values['type'], values['category'], values['amount'], values['description'],
                 values['date'], values['owner_email'], values['owner_name'])
            )
            conn.commit()
            tx = fetch_transaction(cur, cur.lastrowid)
        return jsonify(tx.to_dict()), 201
    finally:
        conn.close()


@transactions_bp.route('', methods=['GET'])
@owner_required
def index(owner_email):
    options = parse_list_options(request.args, current_app.config.get('DEFAULT_PAGE_SIZE', 8))

    conn = current_app.store.get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            page = list_transactions(cur, owner_email, options)
        return jsonify(page.to_dict())
    finally:
        conn.close()


@transactions_bp.route('/summary', methods=['GET'])
@owner_required
def summary(owner_email):
    conn = current_app.store.get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            totals = summarize_owner_totals(cur, owner_email)
        return jsonify(totals)
    finally:
        conn.close()


@transactions_bp.route('/<id>', methods=['GET'])
def get_transaction(id):
    tx_id = parse_id(id)

    conn = current_app.store.get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            tx = fetch_transaction(cur, tx_id, owner_email_from_request())
        return jsonify(tx.to_dict())
    finally:
        conn.close()


@transactions_bp.route('/<id>', methods=['PUT'])
def update_transaction(id):
    tx_id = parse_id(id)
    updates = TransactionUpdate.model_validate(json_body()).columns()
    owner_email = owner_email_from_request()

    conn = current_app.store.get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            fetch_transaction(cur, tx_id, owner_email)
            if updates:
                assignments = ", ".join(f"{column}=%s" for column in updates)
                cur.execute(
                    f"UPDATE transactions SET {assignments} WHERE id=%s",
                    tuple(updates.values()) + (tx_id,)
                )
                conn.commit()
            tx = fetch_transaction(cur, tx_id)
        return jsonify(tx.to_dict())
    finally:
        conn.close()


@transactions_bp.route('/<id>', methods=['DELETE'])
def delete_transaction(id):
    tx_id = parse_id(id)
    owner_email = owner_email_from_request()

    conn = current_app.store.get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            sql = "DELETE FROM transactions WHERE id=%s"
            params = [tx_id]
            if owner_email:
                sql += " AND owner_email=%s"
                params.append(owner_email)
            cur.execute(sql, tuple(params))
            deleted = cur.rowcount
            conn.commit()
        if not deleted:
            raise NotFoundError()
        return jsonify({"ok": True})
    finally:
        conn.close()
