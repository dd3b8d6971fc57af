from pydantic import BaseModel, Field, ValidationError
from typing import Literal, Optional
import json
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "othello.json"


class GameConfig(BaseModel):
    """Settings for one game session"""
    width: int = Field(8, ge=2, le=64)
    height: int = Field(8, ge=2, le=64)
    # Presentation only; the engine works in cells
    cell_width: int = Field(62, gt=0)
    cell_height: int = Field(62, gt=0)
    directions: Literal["cardinal", "compass"] = "cardinal"
    standard_start: bool = False
    opponent: Literal["human", "random", "first"] = "random"
    seed: Optional[int] = None


def load_config(config_file: str = DEFAULT_CONFIG_FILE) -> GameConfig:
    """Load settings from a JSON file, or use defaults if it doesn't exist"""
    try:
        with open(config_file, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info("No config at %s, using defaults", config_file)
        return GameConfig()

    try:
        return GameConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {config_file}: {e}") from e


def save_config(config: GameConfig, config_file: str = DEFAULT_CONFIG_FILE):
    """Save settings to file"""
    with open(config_file, 'w') as f:
        json.dump(config.model_dump(), f, indent=2)
