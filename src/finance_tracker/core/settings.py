import os
import re

from dotenv import find_dotenv, load_dotenv

from finance_tracker.logger import get_logger

logger = get_logger(__name__)


CONFIG_FILENAME = "config.yaml"

_CONFIG_FILE_PATH: str | None = None
_CONFIG_FILE_VALUES: dict[str, str] = {}
_EXTERNAL_ENV_KEYS: set[str] = set()

_CONFIG_KEYS = (
    "LOG_LEVEL",
    "LOG_DIR",
    "MONGODB_URI",
    "MONGODB_DB",
    "MONGODB_TIMEOUT_MS",
    "RECENT_TRANSACTIONS_LIMIT",
    "HOST",
    "PORT",
    "CORS_ORIGINS",
)


def _resolve_dotenv_path() -> str | None:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        candidate = os.path.join(config_dir, ".env")
        if os.path.exists(candidate):
            return candidate
    resolved = find_dotenv(usecwd=True)
    return resolved or None


def _resolve_config_path() -> str:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        return os.path.join(config_dir, CONFIG_FILENAME)
    cwd = os.getcwd()
    candidate = os.path.join(cwd, "config", CONFIG_FILENAME)
    if os.path.exists(candidate):
        return candidate
    return os.path.join(cwd, CONFIG_FILENAME)


def _strip_inline_comment(raw_value: str) -> str:
    in_single = False
    in_double = False
    for index, char in enumerate(raw_value):
        if char == '"' and not in_single:
            in_double = not in_double
        elif char == "'" and not in_double:
            in_single = not in_single
        elif char == "#" and not in_single and not in_double:
            return raw_value[:index].rstrip()
    return raw_value


def _unquote_value(raw_value: str) -> str:
    if len(raw_value) >= 2 and raw_value[0] == raw_value[-1] and raw_value[0] in {'"', "'"}:
        return raw_value[1:-1]
    return raw_value


def read_config_file(path: str | None) -> dict[str, str]:
    """Read flat ``KEY: value`` lines; comments and blank values are ignored."""
    if not path or not os.path.exists(path):
        return {}

    values: dict[str, str] = {}
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            key = key.strip()
            if not key:
                continue
            value = _unquote_value(_strip_inline_comment(raw_value).strip())
            if value:
                values[key] = value
    return values


def load_environment() -> None:
    global _CONFIG_FILE_PATH
    global _CONFIG_FILE_VALUES
    global _EXTERNAL_ENV_KEYS

    dotenv_path = _resolve_dotenv_path()
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)

    _EXTERNAL_ENV_KEYS = set(os.environ.keys())

    _CONFIG_FILE_PATH = _resolve_config_path()
    _CONFIG_FILE_VALUES = read_config_file(_CONFIG_FILE_PATH)

    for key in _CONFIG_KEYS:
        if key not in os.environ and key in _CONFIG_FILE_VALUES:
            os.environ[key] = _CONFIG_FILE_VALUES[key]


def is_env_override(name: str) -> bool:
    return name in _EXTERNAL_ENV_KEYS


def ensure_dir(path: str | None) -> None:
    if path and path not in {".", "./"}:
        os.makedirs(path, exist_ok=True)


def get_env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning(
            "[ENV] %s='%s' below minimum %s, using default %s.",
            name,
            raw,
            min_value,
            default,
        )
        return default
    return value


def get_env_str(name: str, default: str) -> str:
    return os.getenv(name) or default


def get_env_list(name: str) -> list[str]:
    """Comma separated values, trimmed, blanks and repeats dropped."""
    raw = os.getenv(name)
    if not raw:
        return []
    values: list[str] = []
    for part in raw.split(","):
        item = part.strip()
        if item and item not in values:
            values.append(item)
    return values


_SENSITIVE_ENV_KEYS = (
    "KEY",
    "TOKEN",
    "SECRET",
    "PASSWORD",
    "PASS",
)

_URI_CREDENTIALS = re.compile(r"(?<=://)[^@/]+(?=@)")

_ENV_KEYS_TO_LOG = (
    "LOG_LEVEL",
    "LOG_DIR",
    "CONFIG_DIR",
    "MONGODB_URI",
    "MONGODB_DB",
    "MONGODB_TIMEOUT_MS",
    "RECENT_TRANSACTIONS_LIMIT",
    "HOST",
    "PORT",
    "CORS_ORIGINS",
)


def mask_env_value(name: str, value: str) -> str:
    sanitized = value.replace("\r", "\\r").replace("\n", "\\n")
    if name.upper().endswith("_URI"):
        return _URI_CREDENTIALS.sub("****", sanitized)
    if not any(marker in name.upper() for marker in _SENSITIVE_ENV_KEYS):
        return sanitized
    if len(sanitized) <= 4:
        return "****"
    return f"{sanitized[:2]}...{sanitized[-2:]}"


def log_environment() -> None:
    logger.info("[ENV] Logging configured environment variables (masked where needed).")
    for key in _ENV_KEYS_TO_LOG:
        raw_value = os.getenv(key)
        if raw_value is None:
            logger.info("[ENV] %s=<unset>", key)
            continue
        source = "env" if is_env_override(key) else CONFIG_FILENAME
        logger.info("[ENV] %s=%s (%s)", key, mask_env_value(key, raw_value), source)


DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_MONGODB_DB = "finance_tracker"
DEFAULT_MONGODB_TIMEOUT_MS = 5000
DEFAULT_RECENT_TRANSACTIONS_LIMIT = 5
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


load_environment()

LOG_DIR = os.getenv("LOG_DIR")

ensure_dir(LOG_DIR)

MONGODB_URI = get_env_str("MONGODB_URI", DEFAULT_MONGODB_URI)
MONGODB_DB = get_env_str("MONGODB_DB", DEFAULT_MONGODB_DB)
MONGODB_TIMEOUT_MS = get_env_int("MONGODB_TIMEOUT_MS", DEFAULT_MONGODB_TIMEOUT_MS, min_value=1)

RECENT_TRANSACTIONS_LIMIT = get_env_int(
    "RECENT_TRANSACTIONS_LIMIT",
    DEFAULT_RECENT_TRANSACTIONS_LIMIT,
    min_value=1,
)

HOST = get_env_str("HOST", DEFAULT_HOST)
PORT = get_env_int("PORT", DEFAULT_PORT, min_value=1)

CORS_ORIGINS = get_env_list("CORS_ORIGINS")
