from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # HTTP fetch
    user_agent: str = "PreisMonitor/1.0 (+https://example.com)"
    timeout_seconds: int = 20

    # Monitor targets (JSON list, see models/target.py)
    targets_file: str = "config/targets.json"

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}
