"""Tests for MIME type to clipboard format mapping."""

import pytest

from clipresolve.type_mapper import (
    PLAIN_TEXT_FORMAT,
    MimeDatabaseRegistry,
    StaticTypeRegistry,
    default_registry,
    map_content_type,
)


class _RaisingRegistry:
    def resolve_canonical_type(self, mime: str) -> str | None:
        raise RuntimeError("registry unavailable")


class _RecordingRegistry:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def resolve_canonical_type(self, mime: str) -> str | None:
        self.calls.append(mime)
        return "public.utf8-plain-text"


class TestMapContentType:
    def test_plain_text_override_ignores_registry(self) -> None:
        """text/plain never consults the registry."""
        registry = _RecordingRegistry()
        assert map_content_type("text/plain", registry) == PLAIN_TEXT_FORMAT
        assert registry.calls == []

    def test_canonical_type_used_when_known(self) -> None:
        registry = StaticTypeRegistry({"image/x-png": "image/png"})
        assert map_content_type("image/x-png", registry) == "image/png"

    def test_unknown_type_passes_through(self) -> None:
        registry = StaticTypeRegistry({})
        assert map_content_type("bogus/not-a-type", registry) == "bogus/not-a-type"

    def test_malformed_input_passes_through(self) -> None:
        assert map_content_type("not a mime", StaticTypeRegistry()) == "not a mime"

    def test_registry_failure_falls_back(self) -> None:
        assert map_content_type("image/png", _RaisingRegistry()) == "image/png"


class TestMimeDatabaseRegistry:
    def test_known_type(self) -> None:
        assert MimeDatabaseRegistry().resolve_canonical_type("image/png") == "image/png"

    def test_unknown_type(self) -> None:
        assert MimeDatabaseRegistry().resolve_canonical_type("bogus/not-a-type") is None

    def test_default_registry_is_cached(self) -> None:
        assert default_registry() is default_registry()

    @pytest.mark.parametrize("mime", ["bogus/not-a-type", "", "x"])
    def test_default_mapping_never_fails(self, mime: str) -> None:
        assert map_content_type(mime) == mime

    def test_default_mapping_plain_text(self) -> None:
        assert map_content_type("text/plain") == PLAIN_TEXT_FORMAT
