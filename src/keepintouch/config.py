"""Settings read from the environment (and a .env file, when present)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def load_env() -> None:
    """Load .env from the repo root or the current directory, first found wins."""
    for path in (
        Path(__file__).resolve().parent.parent.parent / ".env",
        Path.cwd() / ".env",
    ):
        if path.exists():
            load_dotenv(path)
            break


def _optional_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    namespace: str = "default"
    storage_quota_bytes: int | None = None
    backup_dir: str = "backups"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ
        return cls(
            neo4j_uri=env.get("NEO4J_URI", cls.neo4j_uri).strip(),
            neo4j_user=env.get("NEO4J_USER", cls.neo4j_user).strip(),
            neo4j_password=env.get("NEO4J_PASSWORD", cls.neo4j_password).strip(),
            namespace=env.get("KEEPINTOUCH_NAMESPACE", "").strip() or cls.namespace,
            storage_quota_bytes=_optional_int("KEEPINTOUCH_STORAGE_QUOTA_BYTES"),
            backup_dir=env.get("KEEPINTOUCH_BACKUP_DIR", "").strip() or cls.backup_dir,
            log_level=env.get("LOG_LEVEL", "").strip().upper() or cls.log_level,
        )
