"""Chat resource routed through the Merlin gateway.

`client.chat.completions.create(...)` behaves exactly like the OpenAI SDK call
and additionally accepts `fallback_models` / `gateway_retries` to override the
client-wide routing headers for a single request.
"""

from functools import cached_property
from typing import Any, Iterable, Mapping, Optional

from openai.resources.chat import Chat, Completions

from merlin.resources.routing import with_routing


class MerlinCompletions(Completions):
    def create(  # type: ignore[override]
        self,
        *,
        fallback_models: Optional[Iterable[str]] = None,
        gateway_retries: Optional[int] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> Any:
        return super().create(
            extra_headers=with_routing(extra_headers, fallback_models, gateway_retries),
            **kwargs,
        )


class MerlinChat(Chat):
    @cached_property
    def completions(self) -> MerlinCompletions:  # type: ignore[override]
        return MerlinCompletions(self._client)
