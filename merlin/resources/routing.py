"""Shared helper for per-request gateway routing overrides."""

from typing import Iterable, Mapping, Optional

from merlin.config import canonical_headers, routing_headers


def with_routing(
    extra_headers: Optional[Mapping[str, str]],
    fallback_models: Optional[Iterable[str]],
    gateway_retries: Optional[int],
) -> Optional[Mapping[str, str]]:
    overrides = routing_headers(fallback_models, gateway_retries)
    if extra_headers is None and not overrides:
        return None
    # x-merlin-* names must match the lowercase client defaults
    return {**canonical_headers(extra_headers), **overrides}
