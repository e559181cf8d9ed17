"""
Codec settings, read from the [envelope] table of a TOML file:

    [envelope]
    algorithm  = "chacha20-poly1305"   # or "aes-256-gcm"
    short_keys = "pad"                 # or "reject"
"""

import logging
from os import PathLike
from pathlib import Path
from tomllib import load
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

SECTION = "envelope"


class CodecSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    algorithm: Literal["chacha20-poly1305", "aes-256-gcm"] = "chacha20-poly1305"
    # "pad" right-pads short keys with zero bytes, "reject" refuses them.
    short_keys: Literal["pad", "reject"] = "pad"

    @field_validator("algorithm", "short_keys", mode="before")
    @classmethod
    def normalise(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


def load_settings(path: PathLike | None = None) -> CodecSettings:
    """Load settings from a TOML file, or return defaults when path is None."""
    if path is None:
        return CodecSettings()

    with Path(path).open("rb") as f:
        data = load(f)

    section = data.get(SECTION, {})
    settings = CodecSettings(**section)
    logger.debug("Loaded codec settings from %s: %s", path, settings)
    return settings
