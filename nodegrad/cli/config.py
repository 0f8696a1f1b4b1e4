"""CLI configuration via environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from nodegrad.config import UPDATE_RULES, GraphConfig

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class Settings(BaseSettings):
    """nodegrad CLI configuration. All values from env vars or .env file."""

    log_level: str = "warning"

    # Gradient propagation
    update_rule: str = "accumulate"
    learning_rate: float = Field(0.01, gt=0.0)

    model_config = {"env_prefix": "NODEGRAD_", "env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        v = v.lower()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return v

    @field_validator("update_rule")
    @classmethod
    def _check_update_rule(cls, v: str) -> str:
        if v not in UPDATE_RULES:
            raise ValueError(f"update_rule must be one of {', '.join(UPDATE_RULES)}")
        return v

    def graph_config(self) -> GraphConfig:
        return GraphConfig(update_rule=self.update_rule, learning_rate=self.learning_rate)
