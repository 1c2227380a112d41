# =============================================================================
# core/config.py  —  Server Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the process-wide settings ONCE at startup and freezes them:
#     - N8N_WEBHOOK_URL  →  where image-generation requests are POSTed
#     - DEBUG            →  turns on verbose diagnostic logging (stderr only)
#
#   The handler never calls os.getenv() itself.  main.py builds a
#   ServerConfig and passes it in, so tests construct their own config
#   without touching the environment.
#
# .env SUPPORT:
#   load_dotenv() runs inside from_env(), so a .env file next to the
#   project is honored the same way the shell environment is.
# =============================================================================

from dataclasses import dataclass
import os

from dotenv import load_dotenv


DEFAULT_WEBHOOK_URL = "https://your-n8n-instance.com/webhook/gemini-image-gen"
DEFAULT_TIMEOUT_S = 60.0
USER_AGENT = "N8N-Gemini-MCP-Server/1.0.0"

SERVER_NAME = "n8n-gemini-image"
SERVER_VERSION = "1.0.0"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


@dataclass(frozen=True)
class ServerConfig:
    """Immutable settings shared by every invocation."""

    webhook_url: str = DEFAULT_WEBHOOK_URL
    debug: bool = False
    request_timeout_s: float = DEFAULT_TIMEOUT_S
    user_agent: str = USER_AGENT

    @staticmethod
    def from_env() -> "ServerConfig":
        load_dotenv()
        return ServerConfig(
            # An empty value falls back to the placeholder, same as unset.
            webhook_url=os.getenv("N8N_WEBHOOK_URL") or DEFAULT_WEBHOOK_URL,
            debug=_env_flag("DEBUG", False),
        )
