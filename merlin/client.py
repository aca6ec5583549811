"""OpenAI-compatible client routed through the Merlin gateway.

- Merlin: `openai.OpenAI` subclass that adds the gateway key and routing
  options (fallback models, gateway retries) as `x-merlin-*` default headers.

Credentials default to OPENAI_API_KEY / OPENAI_ORG_ID / OPENAI_PROJECT_ID from
the `env` mapping (os.environ unless given).
"""

import logging
from typing import Any, Mapping, Optional, Union

import httpx
from openai import DEFAULT_MAX_RETRIES, OpenAI

from merlin.config import (
    API_KEY_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ORG_ID_ENV,
    PLACEHOLDER_API_KEY,
    PROJECT_ID_ENV,
    RETRIES_HEADER,
    MerlinConfig,
    canonical_headers,
)
from merlin.core.environment import is_running_in_browser, read_env
from merlin.errors import MerlinConfigError
from merlin.resources.chat import MerlinChat
from merlin.resources.images import MerlinImages


logger = logging.getLogger(__name__)

MISSING_KEYS_MESSAGE = (
    "The OPENAI_API_KEY environment variable is missing or empty & No Merlin Key was provided; "
    "either provide it, or instantiate the client with an api_key option, "
    "like Merlin(api_key='My API Key', merlin_config=MerlinConfig(api_key='My Merlin Key'))."
)

BROWSER_MESSAGE = (
    "It looks like you're running in a browser-like environment.\n\n"
    "This is disabled by default, as it risks exposing your secret API credentials to attackers.\n"
    "If you understand the risks and have appropriate mitigations in place,\n"
    "you can set the `dangerously_allow_browser` option to `True`, e.g.,\n\n"
    "Merlin(api_key=..., merlin_config=..., dangerously_allow_browser=True)\n\n"
    "https://help.openai.com/en/articles/5112595-best-practices-for-api-key-safety\n"
)


class Merlin(OpenAI):
    """OpenAI client that forwards requests through the Merlin gateway.

    Either `api_key` (or OPENAI_API_KEY) or `merlin_config.api_key` must be set,
    and `merlin_config` itself is always required. With only the gateway key the
    client still works for chat and images, but provider features that need a
    real OpenAI key (fine-tuning, Assistants) will not.

    `http_client` takes the place of a custom network agent or fetch
    implementation; `timeout` is in seconds.
    """

    merlin_config: MerlinConfig

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        project: Optional[str] = None,
        base_url: Union[str, httpx.URL, None] = None,
        timeout: Union[float, httpx.Timeout, None] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        default_headers: Optional[Mapping[str, str]] = None,
        default_query: Optional[Mapping[str, object]] = None,
        http_client: Optional[httpx.Client] = None,
        dangerously_allow_browser: bool = False,
        merlin_config: Union[MerlinConfig, Mapping[str, Any], None] = None,
        env: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> None:
        if api_key is None:
            api_key = read_env(API_KEY_ENV, env)
        if organization is None:
            organization = read_env(ORG_ID_ENV, env)
        if project is None:
            project = read_env(PROJECT_ID_ENV, env)

        config = MerlinConfig.coerce(merlin_config)
        gateway_key = (config.api_key or None) if config is not None else None

        if api_key is None and gateway_key is None:
            raise MerlinConfigError(MISSING_KEYS_MESSAGE)
        if api_key is None:
            logger.warning(
                "Only Merlin key is set, some OpenAI features like finetuning or Assistants API wont work"
            )
            api_key = PLACEHOLDER_API_KEY

        if not dangerously_allow_browser and is_running_in_browser():
            raise MerlinConfigError(BROWSER_MESSAGE)

        if config is None:
            raise MerlinConfigError("Merlin config is missing")

        if base_url is None:
            base_url = DEFAULT_BASE_URL
        if timeout is None:
            timeout = DEFAULT_TIMEOUT

        # Routing headers take precedence over caller-supplied ones in any letter case
        headers = {**canonical_headers(default_headers, drop_routing=True), **config.headers()}

        super().__init__(
            api_key=api_key,
            organization=organization,
            project=project,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            default_headers=headers,
            default_query=default_query,
            http_client=http_client,
            **kwargs,
        )

        self.merlin_config = config
        self._merlin_env = env
        self._dangerously_allow_browser = dangerously_allow_browser
        self.api_key = api_key
        self.organization = organization

        self.chat = MerlinChat(self)
        self.images = MerlinImages(self)

        logger.debug(
            "Merlin client ready base_url=%s fallback_models=%s gateway_retries=%s",
            self.base_url,
            ",".join(config.fallback_models or ()) or "-",
            config.headers()[RETRIES_HEADER],
        )

    def copy(  # type: ignore[override]
        self,
        *,
        merlin_config: Union[MerlinConfig, Mapping[str, Any], None] = None,
        _extra_kwargs: Mapping[str, Any] = {},
        **kwargs: Any,
    ) -> "Merlin":
        """Create a new client reusing this one's options, gateway config included.

        Passing `merlin_config` replaces the gateway config of the copy.
        """
        config = MerlinConfig.coerce(merlin_config)
        return super().copy(
            _extra_kwargs={
                "merlin_config": config if config is not None else self.merlin_config,
                "env": self._merlin_env,
                "dangerously_allow_browser": self._dangerously_allow_browser,
                **_extra_kwargs,
            },
            **kwargs,
        )

    with_options = copy
