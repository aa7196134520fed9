from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_SEED_DATA_PATH = str(Path(__file__).parent / "data" / "seed_data.json")


class Settings(BaseSettings):
    APP_NAME: str = "printquote"
    COMPANY_NAME: str = "Print Shop"
    CURRENCY: str = "USD"
    LOG_LEVEL: str = "INFO"

    # Fixture data for the quote repository — point at another JSON file to
    # run the engine against different seed products and stored quotes
    SEED_DATA_PATH: str = DEFAULT_SEED_DATA_PATH

    class Config:
        env_file = ".env"


settings = Settings()
