from pathlib import Path
from typing import List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Museum Ticketing'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security (tokens are issued by the external identity provider)
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    JWT_AUDIENCE: Optional[str] = None

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'museum_ticketing'
    DATABASE_URL: Optional[str] = None  # Full URL override (e.g. sqlite+aiosqlite for tests)

    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Razorpay
    RAZORPAY_KEY_ID: str = 'rzp_test_key'
    RAZORPAY_KEY_SECRET: SecretStr = SecretStr('rzp_test_secret')
    RAZORPAY_WEBHOOK_SECRET: SecretStr = SecretStr('rzp_webhook_secret')
    RAZORPAY_BASE_URL: str = 'https://api.razorpay.com/v1'
    RAZORPAY_TIMEOUT_SECONDS: float = 30.0
    CURRENCY: str = 'INR'

    # Capacity ledger
    CART_RESERVATION_MINUTES: int = 15
    CART_SWEEP_INTERVAL_SECONDS: int = 60  # 0 disables the background sweeper
    CART_SWEEP_BATCH_SIZE: int = 200
    PAYMENT_HOLD_MINUTES: int = 30
    DEFAULT_BUFFER_CAPACITY: int = 5

    # Calendar
    MUSEUM_TIMEZONE: str = 'Asia/Kolkata'


settings = Settings()  # type: ignore
