from __future__ import annotations
import logging

from flask import Flask, request
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from extensions import db
from .helpers import error, pydantic_errors_safe, validation_message

log = logging.getLogger(__name__)


class ConflictError(Exception):
    """Нарушение уникальности (дата дежурства, ячейка расписания)."""


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(ve: ValidationError):
        return error(validation_message(ve), 400, detail=pydantic_errors_safe(ve))

    @app.errorhandler(ConflictError)
    def _conflict(ex: ConflictError):
        return error(str(ex) or "Conflict", 409)

    @app.errorhandler(SQLAlchemyError)
    def _storage(ex: SQLAlchemyError):
        db.session.rollback()
        log.exception("storage error on %s %s", request.method, request.path)
        return error("Server error", 500)

    @app.errorhandler(HTTPException)
    def _http(ex: HTTPException):
        # HTML-страницы оставляем werkzeug, API всегда отвечает JSON
        if not request.path.startswith("/api/"):
            return ex
        return error(ex.description or ex.name, ex.code or 500)
