from functools import wraps
from flask import request

from errors import ValidationError
from models import normalize_email


def owner_email_from_request():
    """Owner email from the query string (``ownerEmail``, or the older ``email``).

    The identity provider has already authenticated the caller on the client;
    the value is trusted as sent.
    """
    return normalize_email(request.args.get('ownerEmail', request.args.get('email')))


def owner_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        owner_email = owner_email_from_request()
        if not owner_email:
            raise ValidationError("ownerEmail query is required")
        return fn(*args, owner_email=owner_email, **kwargs)
    return wrapper
