from flask import request


def json_object():
    """Request body as a dict; anything else (missing, invalid, array) is {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
