from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str

    # If DEV and you hit SSL cert issues on Windows, set DB_SSL_VERIFY=false in .env
    DB_SSL_VERIFY: bool = True

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    SUPER_ADMIN_EMAIL: str | None = None
    SUPER_ADMIN_PASSWORD: str | None = None
    SUPER_ADMIN_NAME: str | None = "Super Admin"
    ENV: str = "dev"  # "dev" or "prod"

    # --- ACCOUNT RULES ---
    # Non-admin accounts must use an address on this domain
    INSTITUTION_EMAIL_DOMAIN: str = "mahindrauniversity.edu.in"
    MIN_PASSWORD_LENGTH: int = 8

    # --- RATE LIMITING ---
    REDIS_URL: str | None = None
    AUTH_RATE_LIMIT: str = "10/minute"

    # --- STORAGE (resumes, attachments, profile pictures) ---
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    STORAGE_BUCKET: str = "portal-uploads"

    FRONTEND_URL: str = "http://localhost:3000"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
