"""
GenTreat Configuration
=======================
Centralised settings for logging, protocol checking and the HTTP API.
Loads overrides from the project-level .env file.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ── Logging ─────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("GENTREAT_LOG_LEVEL", "INFO")
LOG_FILE: str = os.getenv("GENTREAT_LOG_FILE", "")             # empty = console only

# ── Protocol engine ─────────────────────────────────────────────────────
# Reject registry protocols that reuse an order with a different target
STRICT_PROTOCOLS: bool = _flag("GENTREAT_STRICT_PROTOCOLS", True)
# Echo every evaluation step to the logger at DEBUG
TRACE_EVALUATION: bool = _flag("GENTREAT_TRACE", False)

# ── API ─────────────────────────────────────────────────────────────────
API_TITLE = "GenTreat Protocol Evaluation API"
API_VERSION = "1.0.0"
API_HOST: str = os.getenv("GENTREAT_API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("GENTREAT_API_PORT", "8000"))
