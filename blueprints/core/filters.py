from __future__ import annotations
from datetime import date

from schedule_utils import DAY_LABELS, weekday_label

def fmt_date(value: date | None) -> str:
    if not value:
        return ""
    return value.strftime("%Y.%m.%d")

def day_label(value: date | str | None) -> str:
    return weekday_label(value)

def register_filters(app):
    app.add_template_filter(fmt_date, "fmt_date")
    app.add_template_filter(day_label, "day_label")
    app.jinja_env.globals.setdefault("DAY_LABELS", DAY_LABELS)
