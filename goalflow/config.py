from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Selenium
    SELENIUM_REMOTE_URL: str = "http://localhost:4444/wd/hub"  # Selenium Standalone / Grid
    USE_LOCAL_BROWSER: bool = True
    HEADLESS: bool = False  # Visible by default so a human can log in or solve a CAPTCHA
    BROWSER_USER_DATA_DIR: str = ".goalflow_user_data"
    SESSION_STARTUP_TIMEOUT: float = 30.0
    PAGE_LOAD_TIMEOUT: float = 300.0

    # Workflows
    POLL_INTERVAL_SECONDS: float = 3.0
    HOLD_SECONDS: Optional[float] = None  # Overrides every workflow's observation window
    ARTIFACTS_DIR: str = "."

    # Simulation (sandbox mode)
    FORCE_SIMULATION: bool = False
    SIMULATION_STEP_DELAY: float = 1.0

    # Scheduler
    SCHEDULER_TICK_SECONDS: float = 10.0
    INVALID_SCHEDULE_FALLBACK_SECONDS: int = 3600
    TIMEZONE: str = "UTC"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="GOALFLOW_", extra="ignore")


settings = Settings()
