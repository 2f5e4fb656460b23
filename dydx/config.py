"""Configuration for the dydx shell and command line."""

import os
from dataclasses import dataclass, field


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ShellConfig:
    """Settings for an interactive or one-shot session (environment variables override defaults)."""

    prompt: str = ">> "
    variable: str = "x"        # differentiation variable
    prune: bool = True         # simplify derivatives before printing
    log_level: str = "WARNING"
    bindings: dict = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "ShellConfig":
        return cls(
            prompt=os.getenv("DYDX_PROMPT", ">> "),
            variable=os.getenv("DYDX_VAR", "x"),
            prune=_env_flag("DYDX_PRUNE", True),
            log_level=os.getenv("DYDX_LOG_LEVEL", "WARNING").upper(),
        )
