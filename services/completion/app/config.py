from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Ключ OpenAI: без префикса, как в .env из README
    OPENAI_API_KEY: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "COMPLETION_OPENAI_API_KEY"),
    )
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"

    # Параметры генерации
    MODEL: str = "gpt-3.5-turbo-instruct"
    # 0.7 или 1.0: каноничное значение не выбрано, задаётся через env
    TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    MAX_TOKENS: int | None = None

    # Таймауты и отмена
    HTTP_TIMEOUT_SEC: float = 30.0
    CANCEL_ON_DISCONNECT: bool = True
    DISCONNECT_POLL_SEC: float = 0.1

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="COMPLETION_", extra="ignore")

    def openai_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY)
