"""Tests for router configuration, destination files and the router factory."""

import json
import os
from unittest import mock

import pytest
from pydantic import ValidationError

from embedding_router import (
    EmbeddingRouter,
    RouterConfig,
    create_router,
    create_router_from_env,
    load_destinations,
)


@pytest.fixture
def destinations_file(tmp_path):
    path = tmp_path / "destinations.json"
    path.write_text(json.dumps({
        "default": "general",
        "destinations": {
            "billing": ["invoice", "payment", "refund"],
            "technical": ["bug", "error", "crash"],
        },
    }))
    return path


class TestRouterConfig:
    """Test cases for RouterConfig."""

    def test_defaults(self):
        """Test default settings."""
        config = RouterConfig()
        assert config.confidence_threshold is None
        assert config.top_k == 1
        assert config.default_destination is None

    def test_rejects_out_of_range_threshold(self):
        """Test that the threshold must lie in [-1, 1]."""
        with pytest.raises(ValidationError):
            RouterConfig(confidence_threshold=1.2)

    def test_rejects_zero_top_k(self):
        """Test that top_k must be at least 1."""
        with pytest.raises(ValidationError):
            RouterConfig(top_k=0)

    def test_from_env(self):
        """Test reading ROUTER_* variables."""
        env = {
            "ROUTER_EMBEDDING_MODEL": "ollama/nomic-embed-text",
            "ROUTER_CONFIDENCE_THRESHOLD": "0.6",
            "ROUTER_TOP_K": "3",
            "ROUTER_DEFAULT_DESTINATION": "general",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = RouterConfig.from_env()
        assert config.embedding_model == "ollama/nomic-embed-text"
        assert config.confidence_threshold == 0.6
        assert config.top_k == 3
        assert config.default_destination == "general"

    def test_from_env_with_nothing_set(self):
        """Test that an empty environment yields defaults."""
        with mock.patch.dict(os.environ, {}, clear=True):
            assert RouterConfig.from_env() == RouterConfig()


class TestLoadDestinations:
    """Test cases for load_destinations."""

    def test_load(self, destinations_file):
        """Test loading a well-formed file."""
        destinations, default = load_destinations(destinations_file)
        assert list(destinations) == ["billing", "technical"]
        assert destinations["technical"] == ["bug", "error", "crash"]
        assert default == "general"

    def test_single_string_description(self, tmp_path):
        """Test that a lone string is accepted as one description."""
        path = tmp_path / "d.json"
        path.write_text(json.dumps({"destinations": {"billing": "invoice"}}))
        destinations, default = load_destinations(path)
        assert destinations == {"billing": ["invoice"]}
        assert default is None

    @pytest.mark.parametrize(
        "document",
        [
            "not json",
            json.dumps([1, 2]),
            json.dumps({"default": "general"}),
            json.dumps({"destinations": {"billing": [1, 2]}}),
            json.dumps({"destinations": {}, "default": 3}),
        ],
    )
    def test_malformed_documents(self, tmp_path, document):
        """Test that malformed files raise ValueError."""
        path = tmp_path / "bad.json"
        path.write_text(document)
        with pytest.raises(ValueError):
            load_destinations(path)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_destinations(tmp_path / "missing.json")


class TestCreateRouter:
    """Test cases for the router factory."""

    def test_create_with_explicit_destinations(self, keyword_embeddings, support_destinations):
        """Test building a router from a mapping."""
        router = create_router(
            RouterConfig(confidence_threshold=0.6, top_k=2, default_destination="general"),
            destinations=support_destinations,
            embeddings=keyword_embeddings,
        )
        assert isinstance(router, EmbeddingRouter)
        assert router.top_k == 2
        assert router.registry.names() == ["billing", "technical"]
        assert router.route("hello, how are you").destination == "general"

    def test_create_from_file(self, keyword_embeddings, destinations_file):
        """Test that the file default is used when the config has none."""
        router = create_router(
            RouterConfig(destinations_path=str(destinations_file)),
            embeddings=keyword_embeddings,
        )
        assert router.registry.get_default() == "general"
        assert router.route("the app crashed on launch").destination == "technical"

    def test_config_default_overrides_file(self, keyword_embeddings, destinations_file):
        """Test that an explicit config default wins over the file."""
        router = create_router(
            RouterConfig(destinations_path=str(destinations_file), default_destination="human"),
            embeddings=keyword_embeddings,
        )
        assert router.registry.get_default() == "human"

    def test_requires_destinations(self, keyword_embeddings):
        """Test that a router cannot be built without destinations."""
        with pytest.raises(ValueError, match="destinations"):
            create_router(RouterConfig(), embeddings=keyword_embeddings)

    def test_create_from_env(self, keyword_embeddings, destinations_file):
        """Test building a router purely from the environment."""
        env = {
            "ROUTER_DESTINATIONS_PATH": str(destinations_file),
            "ROUTER_CONFIDENCE_THRESHOLD": "0.6",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            router = create_router_from_env(embeddings=keyword_embeddings)
        assert router.confidence_threshold == 0.6
        decision = router.route("hello, how are you")
        assert decision.destination == "general"
        assert decision.is_fallback

    def test_create_from_env_with_path_override(self, keyword_embeddings, destinations_file, tmp_path):
        """Test that an explicit destinations_path wins over ROUTER_DESTINATIONS_PATH."""
        env = {"ROUTER_DESTINATIONS_PATH": str(tmp_path / "missing.json")}
        with mock.patch.dict(os.environ, env, clear=True):
            router = create_router_from_env(
                destinations_path=str(destinations_file),
                embeddings=keyword_embeddings,
            )
        assert router.registry.names() == ["billing", "technical"]
        assert router.registry.get_default() == "general"
