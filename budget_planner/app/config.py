from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # Database settings (in-memory SQLite unless overridden)
    database_url: str = "sqlite://"
    sql_echo: bool = False
    
    # Ledger validation limits
    # Amounts and ids are stored as signed 64-bit integers
    max_amount: int = 2**63 - 1
    category_name_max_length: int = 32
    max_threshold_percent: int = 100
    
    # Logging
    log_level: str = "INFO"
    
    class Config:
        env_prefix = "BUDGET_"
        env_file = ".env"

@lru_cache()
def get_settings():
    return Settings()
