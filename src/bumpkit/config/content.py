"""Raw-content HTTP source configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig
from .storage import get_http_cache_path

RAW_TIMEOUT_SECONDS = 15.0
DEFAULT_RAW_REF = "main"
URL_TEMPLATE_FIELDS = ("{ref}", "{path}")
CACHE_BACKENDS = ("memory", "sqlite", "off")


@dataclass(frozen=True)
class RawContentConfig:
    """Holds the raw file endpoint used to read repository content over HTTP.

    ``url_template`` must contain the ``{ref}`` and ``{path}`` placeholders,
    e.g. ``https://raw.example.org/acme/app/{ref}/{path}``.
    """

    url_template: str
    default_ref: str
    resilience: ResilienceConfig
    token: str | None = None

    def url_for(self, path: str, ref: str | None = None) -> str:
        return self.url_template.format(ref=ref or self.default_ref, path=path.lstrip("/"))


def get_raw_content_config(*, resilience: ResilienceConfig | None = None) -> RawContentConfig:
    values = require_env_vars(("BUMPKIT_RAW_URL_TEMPLATE",))
    url_template = values["BUMPKIT_RAW_URL_TEMPLATE"].strip()
    missing = [name for name in URL_TEMPLATE_FIELDS if name not in url_template]
    if missing:
        raise ConfigurationError(
            f"BUMPKIT_RAW_URL_TEMPLATE lacks placeholder(s): {', '.join(missing)}"
        )

    token = optional_env_var("BUMPKIT_RAW_TOKEN")
    return RawContentConfig(
        url_template=url_template,
        default_ref=optional_env_var("BUMPKIT_RAW_DEFAULT_REF") or DEFAULT_RAW_REF,
        token=token,
        resilience=resilience
        or ResilienceConfig(
            name="raw-content",
            timeout_seconds=RAW_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            cache=_cache_config(),
            default_headers={"Authorization": f"Bearer {token}"} if token else None,
        ),
    )


def _cache_config() -> CacheConfig | None:
    """Response cache from ``BUMPKIT_RAW_CACHE_BACKEND`` (memory, sqlite or off).

    The sqlite database lives under the bumpkit data directory so cached file
    bodies survive between runs.
    """

    backend = (optional_env_var("BUMPKIT_RAW_CACHE_BACKEND") or "memory").lower()
    if backend not in CACHE_BACKENDS:
        raise ConfigurationError(
            f"BUMPKIT_RAW_CACHE_BACKEND must be one of {', '.join(CACHE_BACKENDS)}: {backend}"
        )
    if backend == "off":
        return None
    if backend == "sqlite":
        return CacheConfig(backend="sqlite", sqlite_path=str(get_http_cache_path()))
    return CacheConfig(backend="memory")
