import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./teamspace.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    SITE_URL = data.get("SITE_URL", "http://localhost:8000")
    AUTH_URL = data.get("AUTH_URL", "http://localhost:54321/auth/v1")
    AUTH_ANON_KEY = data.get("AUTH_ANON_KEY", "")
    AUTH_JWT_SECRET = data.get("AUTH_JWT_SECRET", "dev-secret-key-change-in-production")
    AUTH_JWT_AUDIENCE = data.get("AUTH_JWT_AUDIENCE", "authenticated")
    AUTH_TIMEOUT_SECONDS = float(data.get("AUTH_TIMEOUT_SECONDS", 10))
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "sb-access-token")
    SESSION_COOKIE_SECURE = bool(data.get("SESSION_COOKIE_SECURE", False))
    PKCE_VERIFIER_COOKIE_NAME = data.get("PKCE_VERIFIER_COOKIE_NAME", "sb-code-verifier")
    INVITE_EXPIRY_DAYS = int(data.get("INVITE_EXPIRY_DAYS", 7))
