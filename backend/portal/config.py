from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Upstream portal REST API (registries, stocks, clients, auth)
    api_base_url: str = "http://localhost:4200/api"
    api_timeout_seconds: float = 10.0
    refresh_token_path: str = "/auth/login/access-token"

    search_min_query_length: int = 2
    search_provider_limit: int = 5  # per provider, always page 1
    search_max_results: int = 10
    search_debounce_seconds: float = 0.3

    api_prefix: str = "/api/v1"
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]

    model_config = {"env_prefix": "PORTAL_"}


settings = Settings()
