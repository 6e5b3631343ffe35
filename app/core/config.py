"""Configuration settings for the Toro Eats admin dashboard.

This module manages environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings.

    Attributes:
        PROJECT_NAME: Name of the project
        DEBUG: Debug mode flag
        LOG_LEVEL: Root logging level
        ADMIN_PASSWORD: Shared password guarding the admin pages
        JWT_SECRET: Secret used to sign admin tokens
        ADMIN_TOKEN_TTL_HOURS: Lifetime of an admin token in hours
        ADMIN_COOKIE_NAME: Name of the cookie carrying the admin token
        COOKIE_SECURE: Whether the admin cookie is restricted to HTTPS
        BACKEND_API_URL: Base URL of the Toro Eats REST backend
        BACKEND_TIMEOUT: Timeout (seconds) for backend requests
        TABLE_PAGE_SIZE: Default number of rows per table page
    """
    def __init__(self):
        self.PROJECT_NAME = "Toro Eats Admin"
        self.DEBUG = os.getenv("DEBUG", "False").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        # Auth Settings
        self.ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
        if not self.ADMIN_PASSWORD:
            raise ValueError("ADMIN_PASSWORD environment variable is not set")

        self.JWT_SECRET = os.getenv("JWT_SECRET")
        if not self.JWT_SECRET:
            raise ValueError("JWT_SECRET environment variable is not set")

        self.JWT_ALGORITHM = "HS256"
        self.ADMIN_TOKEN_TTL_HOURS = int(os.getenv("ADMIN_TOKEN_TTL_HOURS", 24))
        self.ADMIN_COOKIE_NAME = "admin-token"
        self.COOKIE_SECURE = os.getenv("COOKIE_SECURE", "False").lower() == "true"

        # Backend API Settings
        self.BACKEND_API_URL = os.getenv("BACKEND_API_URL", "http://localhost:3001/api")
        self.BACKEND_TIMEOUT = float(os.getenv("BACKEND_TIMEOUT", 10))

        # Table Settings
        self.TABLE_PAGE_SIZE = int(os.getenv("TABLE_PAGE_SIZE", 25))


settings = Settings()
