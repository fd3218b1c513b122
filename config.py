from __future__ import annotations
import os
from pathlib import Path

from schedule_utils import DEFAULT_BELL_TIMES

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    BASE_DIR = Path(__file__).resolve().parent
    # SQLite file in project directory
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'classboard.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False
    # часовой пояс школы: по нему считается «сегодня» для дежурства и страниц учеников
    SCHOOL_TZ = os.getenv("SCHOOL_TZ", "Asia/Ulaanbaatar")
    # звонки: (начало, конец) урока N = индекс + 1
    BELL_TIMES = DEFAULT_BELL_TIMES
    SEED_DEMO_DATA = False

class DevConfig(BaseConfig):
    DEBUG = True
    SEED_DEMO_DATA = True

class TestConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SCHOOL_TZ = "UTC"

class ProdConfig(BaseConfig):
    DEBUG = False

config_map = {
    "dev": DevConfig,
    "test": TestConfig,
    "prod": ProdConfig,
    "default": DevConfig,
}

DUTY_NAMES_COUNT = 5
