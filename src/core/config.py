"""
Engine configuration.

Settings can be supplied directly, or read from environment variables prefixed with CHESS_ENGINE_
(ex. CHESS_ENGINE_LOG_LEVEL=debug).
"""

import logging
import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, ConfigDict, field_validator

from src.core.exceptions import InvalidFENError
from src.core.shared_types import Side

ENV_PREFIX = "CHESS_ENGINE_"
STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
LOG_FORMAT = "%(asctime)s %(threadName)s %(levelname)s %(name)s: %(message)s"


class EngineSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    starting_fen: str = STARTING_POSITION_FEN
    first_to_move: Side = Side.WHITE
    log_level: str = "INFO"
    actor_thread_name: str = "game-actor"

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: str) -> str:
        """Only the piece placement part of a FEN string: 8 ranks separated by slashes."""
        ranks = value.strip().split("/")
        if len(ranks) != 8:
            raise InvalidFENError(
                f"Piece placement must contain 8 ranks separated by '/', got {len(ranks)}: {value!r}"
            )
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Collect the CHESS_ENGINE_* variables. Anything not set falls back to the defaults above."""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls.model_validate(values)


def configure_logging(settings: EngineSettings) -> None:
    """Process wide logging setup. Modules only ever call logging.getLogger(__name__)."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
