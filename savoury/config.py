from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "Savoury"
    app_secret_key: str = "change-me-in-production"
    app_base_url: str = "http://localhost:8000"

    # REST backend
    api_base_url: str = "http://localhost:3000/api"
    api_timeout: float = 10.0

    # Logging
    log_level: str = "info"

    # Sessions
    access_token_ttl_hours: int = 24
    refresh_token_ttl_days: int = 7
    refresh_cookie_max_age_days: int = 30

    # Elasticsearch
    elastic_url: str = "http://localhost:9200"
    elastic_username: str = ""
    elastic_password: str = ""
    elastic_index: str = "savoury-index"

    # Mail
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    email_user: str = ""
    email_pass: str = ""
    support_email: str = "support@savoury.app"

    @property
    def cookie_secure(self) -> bool:
        return not self.app_base_url.startswith("http://localhost")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
