"""
App Config - environment based settings
"""
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

from analytics.age import AgeGroupPolicy
from analytics.performance import PerformanceThresholds

load_dotenv()


DEV_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
]

PROD_CORS_ORIGINS = [
    "https://rowad.speedballhub.com",
    "http://rowad.speedballhub.com",
] + DEV_CORS_ORIGINS


class Settings(BaseSettings):
    """Speedball Tracker settings"""

    # Supabase
    supabase_url: str = Field(default="", description="Supabase Project URL")
    supabase_key: str = Field(default="", description="Supabase service/anon key")

    # Server
    environment: str = Field(default="development", description="development | production")
    host: str = "0.0.0.0"
    port: int = 2000
    cors_origins: Optional[List[str]] = Field(default=None, description="Overrides per-environment defaults")

    # Pagination
    default_page_limit: int = Field(default=10, ge=1)
    max_page_limit: int = Field(default=100, ge=1)

    # Age groups: False -> age < bound, True -> age <= bound
    age_group_inclusive_bounds: bool = False

    # Performance ladder (total score minimums)
    performance_excellent: int = 200
    performance_good: int = 150
    performance_average: int = 100
    balance_tolerance: float = Field(default=0.10, ge=0.0, le=1.0)

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    class Config:
        env_file = ".env"
        env_prefix = ""
        case_sensitive = False
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def allowed_origins(self) -> List[str]:
        if self.cors_origins:
            return self.cors_origins
        return PROD_CORS_ORIGINS if self.is_production else DEV_CORS_ORIGINS

    def age_group_policy(self) -> AgeGroupPolicy:
        return AgeGroupPolicy(inclusive_upper_bound=self.age_group_inclusive_bounds)

    def performance_thresholds(self) -> PerformanceThresholds:
        return PerformanceThresholds(
            ladder=(
                (self.performance_excellent, "excellent"),
                (self.performance_good, "good"),
                (self.performance_average, "average"),
            ),
            balance_tolerance=self.balance_tolerance,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
