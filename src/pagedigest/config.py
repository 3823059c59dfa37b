## Configuration file for PageDigest

import os
from pathlib import Path

from pagedigest.constants import (
    DEFAULT_CREDENTIAL_KEY,
    DEFAULT_LLM_TEMPERATURE,
    DEFAULT_LLM_TIMEOUT_SECONDS,
    DEFAULT_PROMPT_MAX_BODY_CHARS,
    DEFAULT_RENDER_MAX_BACKLOG,
    DEFAULT_RENDER_UNIT_DELAY,
    GPT_3_5_TURBO,
    LLM_API_TYPE_CHAT_COMPLETION,
    MOCK,
    OPENAI,
    RENDER_GRANULARITY_CHARACTER,
    RENDER_GRANULARITY_FRAGMENT,
)
from pagedigest.utils.general import _env_flag, _load_json_dict, get_env_float, get_env_int

# LLM Providers
LLM_PROVIDER = os.getenv("LLM_PROVIDER", OPENAI)
LLM_API_TYPE = os.getenv("LLM_API_TYPE", LLM_API_TYPE_CHAT_COMPLETION)
_VALID_LLM_PROVIDERS = {OPENAI, MOCK}
if LLM_PROVIDER not in _VALID_LLM_PROVIDERS:
    raise ValueError(
        f"LLM_PROVIDER '{LLM_PROVIDER}' is not supported. "
        f"Valid values are: {sorted(_VALID_LLM_PROVIDERS)}"
    )
if LLM_API_TYPE != LLM_API_TYPE_CHAT_COMPLETION:
    raise ValueError(
        f"LLM_API_TYPE '{LLM_API_TYPE}' is not supported. "
        f"Valid values are: ['{LLM_API_TYPE_CHAT_COMPLETION}']"
    )
MOCK_AI_SUMMARY = _env_flag("MOCK_AI_SUMMARY", False)

# Model Configuration
BASE_MODEL = os.getenv("BASE_MODEL", GPT_3_5_TURBO)
LLM_BASE_URL = os.getenv("LLM_BASE_URL") or None
LLM_TEMPERATURE = get_env_float("LLM_TEMPERATURE", DEFAULT_LLM_TEMPERATURE)
LLM_TIMEOUT_SECONDS = get_env_float("LLM_TIMEOUT_SECONDS", DEFAULT_LLM_TIMEOUT_SECONDS)
# Retries would replay a stream the caller already started rendering
LLM_MAX_RETRIES = get_env_int("LLM_MAX_RETRIES", 0)
LLM_REQUEST_KWARGS = _load_json_dict("LLM_REQUEST_KWARGS")

# Prompt Configuration - 0 disables truncation
PROMPT_MAX_BODY_CHARS = get_env_int("PROMPT_MAX_BODY_CHARS", DEFAULT_PROMPT_MAX_BODY_CHARS)
if PROMPT_MAX_BODY_CHARS < 0:
    raise ValueError("PROMPT_MAX_BODY_CHARS must be >= 0")

# Credential Configuration
CREDENTIAL_KEY = os.getenv("CREDENTIAL_KEY", DEFAULT_CREDENTIAL_KEY)
CREDENTIAL_STORE_PATH = Path(
    os.getenv(
        "CREDENTIAL_STORE_PATH",
        str(Path.home() / ".config" / "pagedigest" / "credentials.json"),
    )
).expanduser()

# Render Configuration
RENDER_GRANULARITY = os.getenv("RENDER_GRANULARITY", RENDER_GRANULARITY_CHARACTER)
_VALID_RENDER_GRANULARITIES = {RENDER_GRANULARITY_CHARACTER, RENDER_GRANULARITY_FRAGMENT}
if RENDER_GRANULARITY not in _VALID_RENDER_GRANULARITIES:
    raise ValueError(
        f"RENDER_GRANULARITY '{RENDER_GRANULARITY}' is invalid. "
        f"Valid values are: {sorted(_VALID_RENDER_GRANULARITIES)}"
    )
RENDER_UNIT_DELAY = get_env_float("RENDER_UNIT_DELAY", DEFAULT_RENDER_UNIT_DELAY)
RENDER_MAX_BACKLOG = get_env_int("RENDER_MAX_BACKLOG", DEFAULT_RENDER_MAX_BACKLOG)

# Tracing config
ENABLE_TRACING = _env_flag("ENABLE_TRACING", True)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
