# backend/responses.py
"""Every endpoint answers with {success, data?, error?: {code, message}}."""

from flask import jsonify


def ok(data=None, status=200):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def fail(code, message, status=400):
    return jsonify({"success": False, "error": {"code": code, "message": message}}), status


def validation_failed(exc):
    """Flatten a pydantic ValidationError into one readable message."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg')}")
    return fail("VALIDATION_ERROR", "; ".join(parts) or "Invalid request", 400)
