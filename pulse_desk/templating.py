"""Shared Jinja2 environment."""

from __future__ import annotations

from fastapi.templating import Jinja2Templates

from .config import settings


def brl(value: float | int | None) -> str:
    """Format as Brazilian reais, e.g. 1700 -> 'R$ 1.700,00'."""
    amount = f"{float(value or 0):,.2f}"
    return "R$ " + amount.replace(",", "_").replace(".", ",").replace("_", ".")


def br_date(value) -> str:
    return value.strftime("%d/%m/%Y") if value else "-"


templates = Jinja2Templates(directory=str(settings.templates_dir))
templates.env.globals["app_title"] = settings.app_title
templates.env.filters["brl"] = brl
templates.env.filters["br_date"] = br_date
