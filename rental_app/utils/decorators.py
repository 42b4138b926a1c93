from functools import wraps

from flask import request, jsonify


def json_body_required(fn):
    """Reject requests whose body is not a JSON object with 400."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            return jsonify(ok=False, message="Request body must be a JSON object"), 400
        return fn(body, *args, **kwargs)

    return wrapper
