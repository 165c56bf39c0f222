"""Casos de uso expostos para a camada HTTP."""

from app.use_cases.fetch_month import fetch_month, get_calendar

__all__ = ["fetch_month", "get_calendar"]
