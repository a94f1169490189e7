from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required. The client refuses to start without it.
    api_key: str = ""

    # Gemini's OpenAI-compatible endpoint
    llm_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    llm_model: str = "gemini-2.5-flash"

    # Minimum transcript length for the eligibility / extraction tasks
    min_transcript_entries: int = 2

    log_level: str = "INFO"

    cors_origins: list[str] = ["http://localhost:5173"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
