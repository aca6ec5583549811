"""Images resource routed through the Merlin gateway.

`generate`, `edit` and `create_variation` accept `fallback_models` /
`gateway_retries` to override the client-wide routing headers for one request.
"""

from typing import Any, Iterable, Mapping, Optional

from openai.resources.images import Images

from merlin.resources.routing import with_routing


class MerlinImages(Images):
    def generate(  # type: ignore[override]
        self,
        *,
        fallback_models: Optional[Iterable[str]] = None,
        gateway_retries: Optional[int] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> Any:
        return super().generate(
            extra_headers=with_routing(extra_headers, fallback_models, gateway_retries),
            **kwargs,
        )

    def edit(  # type: ignore[override]
        self,
        *,
        fallback_models: Optional[Iterable[str]] = None,
        gateway_retries: Optional[int] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> Any:
        return super().edit(
            extra_headers=with_routing(extra_headers, fallback_models, gateway_retries),
            **kwargs,
        )

    def create_variation(  # type: ignore[override]
        self,
        *,
        fallback_models: Optional[Iterable[str]] = None,
        gateway_retries: Optional[int] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> Any:
        return super().create_variation(
            extra_headers=with_routing(extra_headers, fallback_models, gateway_retries),
            **kwargs,
        )
