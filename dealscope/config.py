# dealscope/config.py
"""
DEALSCOPE Configuration — Pydantic Settings.

Resolution order: CLI flags > env vars (DEALSCOPE_*) > .env file > defaults.

Only the CLI and the invoker factory read this; pipeline functions receive
everything they need as arguments.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DealscopeConfig(BaseSettings):
    """Central configuration for DEALSCOPE."""

    model_config = SettingsConfigDict(
        env_prefix="DEALSCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- LLM ---
    backend: Literal["openai", "dspy"] = "openai"
    lm: str = "gpt-4o"
    api_key: str = ""
    api_base: Optional[str] = None
    lm_temperature: float = 0.3
    max_tokens: int = 4000

    # --- Classification ---
    default_lga_id: str = "mackay"

    # --- Paths ---
    home_dir: Path = Field(default_factory=lambda: Path.home() / ".dealscope")

    @property
    def log_dir(self) -> Path:
        return self.home_dir / "logs"


@lru_cache(maxsize=1)
def get_config() -> DealscopeConfig:
    """Return the process-wide config singleton."""
    return DealscopeConfig()
