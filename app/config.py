from enum import Enum
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: Env = Env.local
    log_level: str = "INFO"
    html_dir: Path = Path(__file__).parent / "templates"
    mealdb_url: str = "https://www.themealdb.com/api/json/v1/1/"
    openai_url: str = "https://api.openai.com/v1/"
    openai_api_key: SecretStr | None = None
    remix_model: str = "gpt-4.1"
    remix_max_tokens: int = 500
    remix_temperature: float = 0.8
    favorites_path: Path = Path("favorites.json")
    themes: list[str] = [
        "Spicy",
        "Vegan",
        "Comfort Food",
        "Fancy Restaurant",
        "Kid-Friendly",
        "Breakfast Twist",
    ]

    @property
    def api_key(self) -> str | None:
        if self.openai_api_key is None:
            return None
        return self.openai_api_key.get_secret_value()
