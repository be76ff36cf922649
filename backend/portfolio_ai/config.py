from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "Portfolio Terminal"
    debug: bool = False
    site_owner: str = "Shaun"

    # CORS — comma-separated list of allowed origins
    cors_origins: str = "http://localhost:4321"

    # AI provider: gemini | openai | anthropic
    ai_provider: str = "openai"
    ai_base_url: str = ""  # empty = the provider's official host
    ai_api_key: SecretStr = SecretStr("")
    ai_model: str = "gpt-3.5-turbo"
    ai_request_timeout: float = 60.0

    # Per-session limits (in-memory, reset on page reload)
    ai_max_conversations: int = Field(default=10, ge=0)
    ai_max_history: int = Field(default=10, ge=0)  # messages kept as context, i.e. 5 exchanges

    # Markdown file appended to the system prompt; empty = packaged default
    ai_context_path: str = ""

    @field_validator("ai_max_history")
    @classmethod
    def history_holds_whole_exchanges(cls, value: int) -> int:
        if value % 2:
            raise ValueError("ai_max_history must be even so history keeps whole user/assistant exchanges")
        return value


settings = Settings()
