"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings with env var overrides."""

    # Audio
    sample_rate: int = 22050
    high_pass_cutoff: float = 60.0

    # Beat detection
    onset_threshold: float = 0.3
    min_bpm: float = 60.0
    max_bpm: float = 180.0
    window_size: int = 1024  # reserved, not read by the estimator
    min_interval_fraction: float = 0.2  # seconds between kept beats

    # Patterns
    pattern_length: int = 16

    # Live streaming
    tracker_history: int = 8
    analysis_window_seconds: float = 8.0
    reanalysis_seconds: float = 1.0

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_prefix": "BEATPULSE_"}


settings = Settings()
