from flask import Blueprint, request, jsonify, current_app

from aggregation import month_window, summarize_by_month
from auth_utils import owner_email_from_request

reports_bp = Blueprint('reports', __name__, url_prefix='/api/reports')


@reports_bp.route('/summary', methods=['GET'])
def summary():
    month = request.args.get('month')
    # Reject a bad month before borrowing a connection.
    month_window(month)

    conn = current_app.store.get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            report = summarize_by_month(cur, month, owner_email_from_request())
        return jsonify(report)
    finally:
        conn.close()
