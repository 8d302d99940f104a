"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from phase_tracker.services.macros import MacroLimits

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    user_id: int = 1
    min_protein_per_lb: float = 0.3
    max_protein_per_lb: float = 2.0
    min_carbs_per_lb: float = 0.3
    max_carbs_per_lb: float = 4.0
    min_fat_per_lb: float = 0.3
    max_fat_calorie_share: float = 0.40
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def macro_limits(self) -> MacroLimits:
        """Return the configured macro gram limits."""
        return MacroLimits(
            min_protein_per_lb=self.min_protein_per_lb,
            max_protein_per_lb=self.max_protein_per_lb,
            min_carbs_per_lb=self.min_carbs_per_lb,
            max_carbs_per_lb=self.max_carbs_per_lb,
            min_fat_per_lb=self.min_fat_per_lb,
            max_fat_calorie_share=self.max_fat_calorie_share,
        )
