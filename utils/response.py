from flask import jsonify


def json_response(payload=None, code=200):
    resp = jsonify(payload or {})
    resp.status_code = code
    return resp


def error_response(message="error", code=400):
    return json_response({"error": message}, code=code)
