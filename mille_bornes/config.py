"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel


class RulesConfig(BaseModel):
    """Rules configuration."""

    target_distance: int = 1000
    hand_size: int = 6
    speed_limit_max: int = 50

    # 200km cap per player per round
    long_distance_value: int = 200
    max_long_distance_cards: int = 2

    # Raise ProtocolViolation instead of ignoring out-of-turn calls
    strict_protocol: bool = False


class ScoringConfig(BaseModel):
    """Point values for round scoring."""

    safety: int = 100
    coup_fourre: int = 300
    all_safeties: int = 300
    trip_complete: int = 400
    delayed_action: int = 300
    safe_trip: int = 300
    shutout: int = 500

    match_target: int = 5000


class AIConfig(BaseModel):
    """Automated opponent configuration."""

    think_delay: float = 1.5  # seconds, pacing only
    always_coup_fourre: bool = True


class GameConfig(BaseModel):
    """Game configuration."""

    num_rounds: int = 1
    seed: int | None = None
    log_capacity: int = 50


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_hands: bool = False


class GameLogConfig(BaseModel):
    """JSONL replay log configuration."""

    enabled: bool = False
    output_path: str = "logs"  # directory; main adds a timestamped file name


class Config(BaseModel):
    """Root configuration."""

    rules: RulesConfig = RulesConfig()
    scoring: ScoringConfig = ScoringConfig()
    ai: AIConfig = AIConfig()
    game: GameConfig = GameConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
