import os
import logging
from typing import Union

from pydantic import BaseModel, field_validator, ValidationError

DEFAULT_RPC_URL = "https://cloudflare-eth.com"


class RPC(BaseModel):
    url: str = DEFAULT_RPC_URL
    timeout: float = 30.0

    @field_validator("url")
    @classmethod
    def must_be_https(cls, v: str) -> str:
        # unresolved placeholder falls back to the public endpoint
        if "${" in v:
            return DEFAULT_RPC_URL
        if not v.startswith("https://"):
            raise ValueError("RPC URL must be HTTPS")
        return v

    @field_validator("timeout")
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("RPC timeout must be positive")
        return v


class LoggingCfg(BaseModel):
    level: Union[str, int] = "INFO"

    @field_validator("level")
    @classmethod
    def known_level(cls, v):
        if isinstance(v, int):
            return v
        name = v.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level {v!r}")
        return name


class Settings(BaseModel):
    rpc: RPC = RPC()
    logging: LoggingCfg = LoggingCfg()


def load_settings(path: str = "config.yaml") -> Settings:
    import yaml

    cfg = {}
    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                cfg = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise RuntimeError(f"Configuration error in {path}: {e}") from e
        if not isinstance(cfg, dict):
            raise RuntimeError(f"Configuration error in {path}: top level must be a mapping")

    # allow secure override via env at runtime
    env_rpc = os.environ.get("RPC_URL_OVERRIDE")
    if env_rpc:
        rpc_cfg = cfg.get("rpc")
        cfg["rpc"] = dict(rpc_cfg) if isinstance(rpc_cfg, dict) else {}
        cfg["rpc"]["url"] = env_rpc

    try:
        return Settings.model_validate(cfg)
    except ValidationError as e:
        raise RuntimeError(f"Configuration error in {path}: {e}") from e
