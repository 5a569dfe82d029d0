from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    STORE_BACKEND: str = "redis"  # "redis" or "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    STORE_KEY_PREFIX: str = "rental:"

    INVENTORY_KEY: str = "inventory"
    SEASON_KEY: str = "season"
    HISTORY_KEY: str = "quotes"
    LAST_CLIENT_KEY: str = "last-client"
    COUNTER_KEY: str = "reservation-counter"
    LOGO_KEY: str = "logo"

    RESERVATION_PREFIX: str = "#"
    RESERVATION_WIDTH: int = 4
    COUNTER_START: int = 1

    DEFAULT_VEHICLE_NAME: str = "Vehicle"
    SEED_INITIAL_INVENTORY: bool = True
    PRICE_CEILING_FLOOR: float = 300.0

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False


settings = Settings()
