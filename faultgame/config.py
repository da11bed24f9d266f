import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv


DEFAULT_MAX_DEPTH = 73


@dataclass(frozen=True)
class Config:
    max_depth: int = DEFAULT_MAX_DEPTH
    log_file: str = "faultgame-cli.log"
    log_level: str = "DEBUG"
    history_file: str = ".cli-history"


def load_config() -> Config:
    """Reads the configuration from the environment, after loading the .env file of the working directory, if any."""

    load_dotenv(find_dotenv(usecwd=True))

    max_depth_str = os.getenv("FAULTGAME_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))
    try:
        max_depth = int(max_depth_str)
    except ValueError:
        raise ValueError(f"Invalid FAULTGAME_MAX_DEPTH: {max_depth_str}")
    if max_depth < 0:
        raise ValueError(f"Invalid FAULTGAME_MAX_DEPTH: {max_depth_str}")

    log_level = os.getenv("FAULTGAME_LOG_LEVEL", "DEBUG").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Invalid FAULTGAME_LOG_LEVEL: {log_level}")

    return Config(
        max_depth=max_depth,
        log_file=os.getenv("FAULTGAME_LOG_FILE", "faultgame-cli.log"),
        log_level=log_level,
        history_file=os.getenv("FAULTGAME_HISTORY", ".cli-history"),
    )
