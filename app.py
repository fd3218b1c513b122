from __future__ import annotations
import os
from importlib import import_module
from flask import Flask
from config import config_map
from extensions import db, migrate
from blueprints.api.errors import register_error_handlers
from sqlalchemy import inspect

def _seed_from_config(app):
    if not app.config.get("SEED_DEMO_DATA"):
        return
    with app.app_context():
        # таблиц может ещё не быть (alembic upgrade и т.п.)
        if not inspect(db.engine).has_table("timetable_slots"):
            return
        from seed import seed_demo  # локальный импорт, чтобы избежать циклов
        seed_demo()

def register_blueprints(app: Flask) -> None:
    # Жёстко импортируем модуль с маршрутами core перед взятием bp
    import_module("blueprints.core.routes")
    from blueprints.core import bp as core_bp
    from blueprints.timetable.routes import api_bp as timetable_api_bp
    from blueprints.homework.routes import api_bp as homework_api_bp
    from blueprints.duty.routes import api_bp as duty_api_bp

    # core без префикса → '/', '/health' и страницы учеников
    app.register_blueprint(core_bp)
    app.register_blueprint(timetable_api_bp, url_prefix="/api")
    app.register_blueprint(homework_api_bp, url_prefix="/api")
    app.register_blueprint(duty_api_bp, url_prefix="/api")

def create_app(config_name: str | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    cfg_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config_map[cfg_name])
    app.json.sort_keys = False
    # --- ВАЖНО: изоляция БД в тестах ---
    # pytest всегда выставляет переменную окружения PYTEST_CURRENT_TEST.
    # Делаем БД в памяти, чтобы никакие изменения из одного теста не протекали в другой.
    if os.environ.get("PYTEST_CURRENT_TEST"):
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        app.config["SEED_DEMO_DATA"] = False
    if app.config["SQLALCHEMY_DATABASE_URI"] == "sqlite:///:memory:":
        app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", {"connect_args": {"check_same_thread": False}})

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass
    db.init_app(app)
    migrate.init_app(app, db)
    register_blueprints(app)
    register_error_handlers(app)
    _seed_from_config(app)
    return app
