import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_env_file() -> str | None:
    """Find .env file, preferring .env.local for local development."""
    for env_file in [".env.local", ".env"]:
        # Check in current directory and project root
        for base in [".", os.environ.get("REPO_ROOT", "")]:
            if base:
                path = Path(base) / env_file
                if path.exists():
                    return str(path)
    return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_find_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sui_rpc_url: str = "https://fullnode.mainnet.sui.io:443"
    # Dev-inspect needs a sender but never signs
    sender_address: str = "0x" + "0" * 64
    request_timeout: float = 30.0


settings = Settings()
