from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Athletics Club Access API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend Domains
    # -------------------------------------------------
    FRONTEND_DOMAIN: Optional[str] = Field(None, env="FRONTEND_DOMAIN")

    CLUB_DOMAINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (Auth + permission tables)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, env="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    # -------------------------------------------------
    # Access control
    # -------------------------------------------------
    # JSON file overriding the shipped tab/widget/alias registries
    ACCESS_CONFIG_PATH: Optional[str] = Field(None, env="ACCESS_CONFIG_PATH")

    # Role name that bypasses every permission check
    SUPERADMIN_ROLE: str = "superadmin"

    # Role assigned when user metadata carries an unknown role
    DEFAULT_ROLE: str = "athlete"

    # How long database permission lookups stay cached
    PERMISSION_CACHE_TTL_SECONDS: int = Field(
        60,
        env="PERMISSION_CACHE_TTL_SECONDS",
        description="TTL for cached user/role permission lookups (default: 60)",
    )

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

if settings.FRONTEND_DOMAIN:
    domain = settings.FRONTEND_DOMAIN
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    cors_origins.append(domain.rstrip("/"))

cors_origins.extend([d.rstrip("/") for d in settings.CLUB_DOMAINS])

settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
