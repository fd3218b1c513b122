from __future__ import annotations
from typing import Any, Dict, Type

from flask import abort, jsonify, request
from pydantic import BaseModel, ValidationError

# ----------------------- Helpers -----------------------
def ok(data: Any, status: int = 200):
    return jsonify(data), status

def created(location: str, data: Any):
    resp = jsonify(data)
    resp.status_code = 201
    resp.headers["Location"] = location
    return resp

def error(msg: str, status: int = 400, detail: Any = None):
    payload: Dict[str, Any] = {"error": msg}
    if detail is not None:
        payload["detail"] = detail
    return jsonify(payload), status

def json_object() -> Dict[str, Any]:
    """Тело запроса, если это JSON-объект; иначе 400."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Invalid body")
    return payload

def dump(schema: Type[BaseModel], row) -> Dict[str, Any]:
    return schema.model_validate(row).model_dump(mode="json", by_alias=True)

def dump_many(schema: Type[BaseModel], rows) -> list:
    return [dump(schema, r) for r in rows]

def pydantic_errors_safe(ve: ValidationError):
    errs = ve.errors(include_url=False)
    for e in errs:
        if "ctx" in e and isinstance(e["ctx"], dict):
            e["ctx"] = {k: str(v) for k, v in e["ctx"].items()}
    return errs

def validation_message(ve: ValidationError) -> str:
    errs = ve.errors(include_url=False)
    if not errs:
        return "Invalid body"
    first = errs[0]
    msg = str(first.get("msg", "Invalid body"))
    if first.get("type") == "value_error":
        return msg.removeprefix("Value error, ")
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"{loc}: {msg}" if loc else msg
