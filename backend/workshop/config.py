# backend/workshop/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/workshop.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///workshop.sqlite3",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Invoice tax rate as a decimal fraction (0.08 = 8%)
    WORKSHOP_TAX_RATE = os.environ.get("WORKSHOP_TAX_RATE", "0.08")
    WORKSHOP_INVOICE_DUE_DAYS = int(os.environ.get("WORKSHOP_INVOICE_DUE_DAYS", "30"))

    # Non-owner roles only see activity inside this trailing window
    WORKSHOP_LOG_WINDOW_HOURS = int(os.environ.get("WORKSHOP_LOG_WINDOW_HOURS", "48"))

    # No authentication: requests without X-User-Id act as this user
    WORKSHOP_DEMO_USER_ID = int(os.environ.get("WORKSHOP_DEMO_USER_ID", "1"))
