"""Runtime settings read from the environment.

``PORT`` keeps the plain name the demo servers in this repo have always
used; the other variables are prefixed.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass
class Settings:
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        raw_port = env.get("PORT", str(cls.port))
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {raw_port!r}") from None
        return cls(
            host=env.get("PRODUCT_API_HOST", cls.host),
            port=port,
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
        )
