# app/config/settings.py
# Runtime configuration for the dashboard analytics service

import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


class DashboardConfig:
    """Configuration for the dashboard service"""

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./task_dashboard.db")
    DB_SSLMODE = os.getenv("DB_SSLMODE")

    # Analytics
    ANALYTICS = {
        'recent_activity_limit': int(os.getenv('RECENT_ACTIVITY_LIMIT', 20)),
        'trend_months': int(os.getenv('TREND_MONTHS', 6)),
        'on_time_grace_hours': int(os.getenv('ON_TIME_GRACE_HOURS', 24)),
    }

    # Server
    SERVER = {
        'host': os.getenv('HOST', '0.0.0.0'),
        'port': int(os.getenv('PORT', 8000)),
        'reload': os.getenv('RELOAD', 'true').lower() == 'true',
    }

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Default admin provisioning
    DEFAULT_ADMIN = {
        'username': os.getenv('ADMIN_USERNAME', 'Admin'),
        'email': os.getenv('ADMIN_EMAIL', 'admin@taskmanagement.com'),
    }

    DEFAULT_CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Get allowed CORS origins, falling back to local development hosts"""
        raw = os.getenv('CORS_ORIGINS')
        if not raw:
            return list(cls.DEFAULT_CORS_ORIGINS)
        return [origin.strip() for origin in raw.split(',') if origin.strip()]

    @classmethod
    def get_connect_args(cls, database_url: str = None) -> dict:
        """Get driver connect args for the configured database"""
        url = (database_url or cls.DATABASE_URL).lower()
        if url.startswith("sqlite"):
            return {"check_same_thread": False}
        if cls.DB_SSLMODE:
            return {"sslmode": cls.DB_SSLMODE}
        return {}
