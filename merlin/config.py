"""Gateway configuration and client defaults.

MerlinConfig is carried by every `Merlin` client and turned into the
`x-merlin-*` headers the gateway reads on each request.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from merlin.errors import MerlinConfigError


DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 600.0  # seconds
DEFAULT_GATEWAY_RETRIES = 2

# Stands in for the provider key when only the gateway key is configured
PLACEHOLDER_API_KEY = "sk-undefined"

API_KEY_ENV = "OPENAI_API_KEY"
ORG_ID_ENV = "OPENAI_ORG_ID"
PROJECT_ID_ENV = "OPENAI_PROJECT_ID"

MERLIN_KEY_HEADER = "x-merlin-key"
FALLBACK_MODELS_HEADER = "x-merlin-fallback-models"
RETRIES_HEADER = "x-merlin-retries"

ROUTING_HEADERS = (MERLIN_KEY_HEADER, FALLBACK_MODELS_HEADER, RETRIES_HEADER)
CONFIG_KEYS = ("api_key", "max_retries", "fallback_models")


def _models_tuple(models: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    if models is None:
        return None
    if isinstance(models, str):
        raise MerlinConfigError("fallback_models must be a sequence of model ids, not a string")
    return tuple(str(m) for m in models)


def _check_retries(retries: Optional[int]) -> None:
    if retries is None:
        return
    if isinstance(retries, bool) or not isinstance(retries, int) or retries < 0:
        raise MerlinConfigError(f"max_retries must be a non-negative integer, got {retries!r}")


def canonical_headers(headers: Optional[Mapping[str, str]], drop_routing: bool = False) -> Dict[str, str]:
    """Lowercase the x-merlin-* names in `headers`, or drop them with `drop_routing`.

    Header names are case-insensitive on the wire, so a mixed-case spelling must
    not survive next to the derived lowercase one.
    """
    result: Dict[str, str] = {}
    for name, value in (headers or {}).items():
        lowered = name.lower()
        if lowered in ROUTING_HEADERS:
            if drop_routing:
                continue
            name = lowered
        result[name] = value
    return result


def routing_headers(
    fallback_models: Optional[Iterable[str]] = None,
    retries: Optional[int] = None,
) -> Dict[str, str]:
    """Per-request routing overrides; only the given values become headers."""
    headers: Dict[str, str] = {}
    models = _models_tuple(fallback_models)
    if models is not None:
        headers[FALLBACK_MODELS_HEADER] = ",".join(models)
    if retries is not None:
        _check_retries(retries)
        headers[RETRIES_HEADER] = str(retries)
    return headers


@dataclass(frozen=True)
class MerlinConfig:
    api_key: Optional[str]
    max_retries: Optional[int] = None
    fallback_models: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        _check_retries(self.max_retries)
        object.__setattr__(self, "fallback_models", _models_tuple(self.fallback_models))

    @classmethod
    def coerce(cls, value: Any) -> Optional["MerlinConfig"]:
        """Accept a MerlinConfig, a plain mapping, or None."""
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            unknown = sorted(str(k) for k in value if k not in CONFIG_KEYS)
            if unknown:
                raise MerlinConfigError(
                    f"Unknown merlin_config keys: {', '.join(unknown)}; expected {', '.join(CONFIG_KEYS)}"
                )
            return cls(
                api_key=value.get("api_key"),
                max_retries=value.get("max_retries"),
                fallback_models=value.get("fallback_models"),
            )
        raise MerlinConfigError(f"merlin_config must be a MerlinConfig or a mapping, got {type(value).__name__}")

    def headers(self) -> Dict[str, str]:
        retries = DEFAULT_GATEWAY_RETRIES if self.max_retries is None else self.max_retries
        headers = {
            FALLBACK_MODELS_HEADER: ",".join(self.fallback_models or ()),
            RETRIES_HEADER: str(retries),
        }
        # Mappings may omit api_key; the header is then left out
        if self.api_key:
            headers = {MERLIN_KEY_HEADER: self.api_key, **headers}
        return headers
