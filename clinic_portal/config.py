"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        secret_key: Secret key used to sign session tokens
        algorithm: HMAC algorithm for token signing (HS256)
        access_token_expire_minutes: Session token lifetime in minutes

        # Password hashing
        password_hash_iterations: PBKDF2 iteration count
        password_hash_workers: Size of the worker pool used for hashing

        # Repository
        repository_timeout_seconds: Upper bound for a single repository call

        # Frontend settings
        cors_origins: Origins allowed to call the API from a browser

        # Bootstrap admin settings (optional)
        bootstrap_admin_email: Optional admin email for first admin creation
        bootstrap_admin_password: Optional admin password for first admin creation
        bootstrap_admin_name: Display name of the bootstrap admin
    """
    # Database settings
    database_url: str = "sqlite:///./clinic_portal.db"

    # Token settings
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Password hashing settings
    password_hash_iterations: int = 10000
    password_hash_workers: int = 4

    # Repository settings
    repository_timeout_seconds: float = 5.0

    # Frontend settings
    cors_origins: List[str] = ["http://localhost:3000"]

    # Bootstrap admin settings (optional - only used for first admin creation)
    bootstrap_admin_email: Optional[str] = None
    bootstrap_admin_password: Optional[str] = None
    bootstrap_admin_name: str = "System Administrator"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()
