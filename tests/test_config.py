"""MerlinConfig validation and header derivation."""

from __future__ import annotations

import dataclasses

import pytest

from merlin.config import MerlinConfig, canonical_headers, routing_headers
from merlin.errors import MerlinConfigError


class TestMerlinConfig:
    def test_headers_with_all_options(self) -> None:
        config = MerlinConfig(api_key="k", max_retries=5, fallback_models=["a", "b"])
        assert config.headers() == {
            "x-merlin-key": "k",
            "x-merlin-fallback-models": "a,b",
            "x-merlin-retries": "5",
        }

    def test_zero_retries_is_kept(self) -> None:
        assert MerlinConfig(api_key="k", max_retries=0).headers()["x-merlin-retries"] == "0"

    def test_fallback_models_are_stored_as_tuple(self) -> None:
        config = MerlinConfig(api_key="k", fallback_models=["a", "b"])
        assert config.fallback_models == ("a", "b")

    def test_config_is_frozen(self) -> None:
        config = MerlinConfig(api_key="k")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.api_key = "other"  # type: ignore[misc]

    @pytest.mark.parametrize("retries", [-1, "3", 1.5, True])
    def test_invalid_retries_rejected(self, retries: object) -> None:
        with pytest.raises(MerlinConfigError, match="max_retries"):
            MerlinConfig(api_key="k", max_retries=retries)  # type: ignore[arg-type]

    def test_string_fallback_models_rejected(self) -> None:
        with pytest.raises(MerlinConfigError, match="fallback_models"):
            MerlinConfig(api_key="k", fallback_models="a,b")  # type: ignore[arg-type]

    def test_missing_gateway_key_omits_header(self) -> None:
        assert "x-merlin-key" not in MerlinConfig(api_key=None).headers()


class TestCoerce:
    def test_none_passes_through(self) -> None:
        assert MerlinConfig.coerce(None) is None

    def test_instance_passes_through(self) -> None:
        config = MerlinConfig(api_key="k")
        assert MerlinConfig.coerce(config) is config

    def test_mapping(self) -> None:
        config = MerlinConfig.coerce({"api_key": "k", "fallback_models": ["m"]})
        assert config == MerlinConfig(api_key="k", fallback_models=("m",))

    def test_unknown_mapping_keys_rejected(self) -> None:
        with pytest.raises(MerlinConfigError, match="fallbackModels"):
            MerlinConfig.coerce({"api_key": "k", "fallbackModels": ["m"]})

    def test_unsupported_type(self) -> None:
        with pytest.raises(MerlinConfigError, match="merlin_config"):
            MerlinConfig.coerce("k")


def test_routing_headers_only_include_given_values() -> None:
    assert routing_headers() == {}
    assert routing_headers(fallback_models=[]) == {"x-merlin-fallback-models": ""}
    assert routing_headers(retries=4) == {"x-merlin-retries": "4"}


def test_canonical_headers_lowercases_or_drops_routing_names() -> None:
    headers = {"X-Merlin-Key": "k", "X-Merlin-Retries": "1", "X-Title": "demo"}

    assert canonical_headers(headers) == {"x-merlin-key": "k", "x-merlin-retries": "1", "X-Title": "demo"}
    assert canonical_headers(headers, drop_routing=True) == {"X-Title": "demo"}
    assert canonical_headers(None) == {}
