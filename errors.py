import mysql.connector
import pydantic
from flask import jsonify
from werkzeug.exceptions import HTTPException


class APIError(Exception):
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(APIError):
    status_code = 400


class NotFoundError(APIError):
    status_code = 404

    def __init__(self, message="Transaction not found", status_code=None):
        super().__init__(message, status_code)


class StoreError(APIError):
    """Persistence failure. A malformed id is a 400, everything else a 500."""
    status_code = 500


def schema_error_message(err):
    """First problem of a ``pydantic.ValidationError`` as a client message."""
    first = err.errors()[0]
    if first["type"] == "value_error":
        return str(first["ctx"]["error"])
    field = ".".join(str(part) for part in first["loc"])
    return f"{field}: {first['msg']}" if field else first["msg"]


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(err):
        if err.status_code >= 500:
            app.logger.error("%s: %s", type(err).__name__, err.message)
        else:
            app.logger.warning("%s: %s", type(err).__name__, err.message)
        return jsonify({"message": err.message}), err.status_code

    @app.errorhandler(pydantic.ValidationError)
    def handle_schema_error(err):
        message = schema_error_message(err)
        app.logger.warning("ValidationError: %s", message)
        return jsonify({"message": message}), 400

    @app.errorhandler(mysql.connector.Error)
    def handle_db_error(err):
        app.logger.exception("Database error: %s", err)
        return jsonify({"message": "Database error"}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        if err.code is None or err.code < 400:
            return err
        return jsonify({"message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        app.logger.exception("Unhandled error")
        return jsonify({"message": "Server error"}), 500
