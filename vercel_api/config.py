from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_base_url: str = "https://api.vercel.com"
    token: str = ""
    team_id: str = ""
    timeout: float = 30.0
    page_limit: int = 20
    user_agent: str = "vercel-api-client/0.1"
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "VERCEL_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
