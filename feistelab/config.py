from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    # Cipher
    default_key: str = Field(default="0123456789ABCDEF", description="64-bit master key as 16 hex characters")
    key_mixing: bool = Field(default=False, description="Feed scheduled round keys into the round function")

    # Evaluation
    sac_trials: int = Field(default=64, ge=1, le=10000)
    roundtrip_vectors: int = Field(default=1000, ge=1, le=1_000_000)

    # Reproducibility
    global_seed: int = Field(default=1337)

    # Logging / output
    log_level: str = Field(default="INFO")
    runs_dir: str = Field(default="runs")

    @field_validator("default_key")
    @classmethod
    def _hex_key(cls, v: str) -> str:
        v = v.strip()
        if len(v) != 16 or any(ch not in "0123456789abcdefABCDEF" for ch in v):
            raise ValueError("default_key must be exactly 16 hexadecimal characters")
        return v.upper()

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.strip().upper()


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    def _bool(name: str, default: bool) -> bool:
        v = os.getenv(name)
        if v is None:
            return default
        return v.strip().lower() in {"1", "true", "yes", "y", "on"}

    return Settings(
        default_key=os.getenv("FEISTELAB_DEFAULT_KEY", "0123456789ABCDEF"),
        key_mixing=_bool("FEISTELAB_KEY_MIXING", False),
        sac_trials=int(os.getenv("FEISTELAB_SAC_TRIALS", "64")),
        roundtrip_vectors=int(os.getenv("FEISTELAB_ROUNDTRIP_VECTORS", "1000")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        log_level=os.getenv("FEISTELAB_LOG_LEVEL", "INFO"),
        runs_dir=os.getenv("FEISTELAB_RUNS_DIR", "runs"),
    )
