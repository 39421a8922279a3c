"""Environment-driven settings.

Everything operators can tune lives here and is read once, when the app
is built. Missing values stay empty strings so guards and the outbound
gateway can fail closed and report exactly what is absent.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_DIR = "data"

ADMIN_TOKEN_HEADER = "x-rt-admin-token"
SESSION_COOKIE_NAME = "rt_session"
SESSION_TTL_SECONDS = 7 * 24 * 60 * 60

# Provider credentials, in the order they are reported when missing
PROVIDER_ENV_VARS = (
    "CHATGURU_API_ENDPOINT",
    "CHATGURU_API_KEY",
    "CHATGURU_ACCOUNT_ID",
    "CHATGURU_PHONE_ID",
)


def _env(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip()


def _secret(name: str) -> str:
    # Secrets are compared byte-for-byte, so no whitespace trimming
    return os.environ.get(name, "")


@dataclass(frozen=True)
class ProviderSettings:
    """ChatGuru send-message API credentials."""

    endpoint: str = ""
    api_key: str = ""
    account_id: str = ""
    phone_id: str = ""

    def missing(self) -> list[str]:
        """Env var names of every credential that is not configured."""
        values = (self.endpoint, self.api_key, self.account_id, self.phone_id)
        return [name for name, value in zip(PROVIDER_ENV_VARS, values) if not value]


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings.

    Attributes:
        provider: Outbound API credentials.
        admin_token: Static secret for machine callers (RT_ADMIN_TOKEN).
        admin_user: Admin panel username.
        admin_pass: Admin panel password.
        session_secret: HMAC key used to sign session tokens.
        config_path: JSON file holding the operating config.
        knowledge_path: Plain-text knowledge file.
        events_path: JSON-lines audit log.
    """

    provider: ProviderSettings
    admin_token: str
    admin_user: str
    admin_pass: str
    session_secret: str
    config_path: Path
    knowledge_path: Path
    events_path: Path

    @classmethod
    def from_env(cls) -> Settings:
        data_dir = Path(_env("DATA_DIR") or DEFAULT_DATA_DIR)
        return cls(
            provider=ProviderSettings(
                endpoint=_env("CHATGURU_API_ENDPOINT"),
                api_key=_env("CHATGURU_API_KEY"),
                account_id=_env("CHATGURU_ACCOUNT_ID"),
                phone_id=_env("CHATGURU_PHONE_ID"),
            ),
            admin_token=_secret("RT_ADMIN_TOKEN"),
            admin_user=_env("ADMIN_USER"),
            admin_pass=_secret("ADMIN_PASS"),
            session_secret=_secret("SESSION_SECRET"),
            config_path=Path(_env("CONFIG_FILE") or data_dir / "config.json"),
            knowledge_path=Path(_env("KNOWLEDGE_FILE") or data_dir / "knowledge.txt"),
            events_path=Path(_env("EVENTS_FILE") or data_dir / "events.jsonl"),
        )
