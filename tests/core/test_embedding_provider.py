"""
Test suite for EmbeddingProvider.

Tests text normalization, cache behaviour across case/whitespace variants,
zero-vector fallback on upstream failure and invalid vectors.

System role: Verification of embedding generation and caching
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from drive_qa.core.embeddings.embedding_provider import EmbeddingProvider, normalize_text


class TestNormalizeText:
    """Test suite for normalize_text."""

    def test_normalize_should_collapse_whitespace_and_lowercase(self) -> None:
        """Test whitespace runs collapse and case folds."""
        # Act
        result = normalize_text("  Hello \n\n  WORLD\t again ")

        # Assert
        assert result == "hello world again"

    def test_normalize_should_truncate_to_max_chars(self) -> None:
        """Test output never exceeds max_chars."""
        # Act
        result = normalize_text("abcdef " * 10, max_chars=12)

        # Assert
        assert len(result) <= 12
        assert result == "abcdef abcde"

    @pytest.mark.parametrize(
        "text",
        ["Mixed Case  Text", "  padded  ", "word " * 50, "a\tb\nc", ""],
    )
    def test_normalize_should_be_idempotent(self, text: str) -> None:
        """Test normalizing twice equals normalizing once."""
        # Act
        once = normalize_text(text, max_chars=20)
        twice = normalize_text(once, max_chars=20)

        # Assert
        assert once == twice


class TestEmbeddingProviderCache:
    """Test suite for embedding cache behaviour."""

    @pytest.mark.asyncio
    async def test_embed_should_call_backend_once_for_equivalent_text(
        self,
        embedding_provider: EmbeddingProvider,
        mock_embeddings: MagicMock,
    ) -> None:
        """Test case and whitespace variants share a single upstream call."""
        # Act
        first = await embedding_provider.embed("Hello   World")
        second = await embedding_provider.embed("  hello world ")

        # Assert
        assert first == second == [0.1, 0.2, 0.3]
        mock_embeddings.aembed_query.assert_awaited_once_with("hello world")
        assert embedding_provider.cache_size == 1

    @pytest.mark.asyncio
    async def test_embed_with_status_should_flag_cache_hits(
        self,
        embedding_provider: EmbeddingProvider,
    ) -> None:
        """Test second lookup reports cached=True."""
        # Act
        miss = await embedding_provider.embed_with_status("text")
        hit = await embedding_provider.embed_with_status("TEXT")

        # Assert
        assert miss.cached is False
        assert hit.cached is True

    @pytest.mark.asyncio
    async def test_clear_cache_should_force_new_upstream_call(
        self,
        embedding_provider: EmbeddingProvider,
        mock_embeddings: MagicMock,
    ) -> None:
        """Test clearing the cache drops previous vectors."""
        # Arrange
        await embedding_provider.embed("text")

        # Act
        embedding_provider.clear_cache()
        await embedding_provider.embed("text")

        # Assert
        assert mock_embeddings.aembed_query.await_count == 2


class TestEmbeddingProviderFallback:
    """Test suite for zero-vector fallback."""

    @pytest.mark.asyncio
    async def test_embed_should_return_zero_vector_after_retries_fail(
        self,
        embedding_provider: EmbeddingProvider,
        mock_embeddings: MagicMock,
    ) -> None:
        """Test persistent backend failure yields zeros and is not cached."""
        # Arrange
        mock_embeddings.aembed_query = AsyncMock(side_effect=RuntimeError("quota"))

        # Act
        result = await embedding_provider.embed_with_status("some text")

        # Assert
        assert result.vector == [0.0, 0.0, 0.0]
        assert result.is_degraded
        assert mock_embeddings.aembed_query.await_count == 3
        assert embedding_provider.cache_size == 0

    @pytest.mark.asyncio
    async def test_embed_should_recover_after_transient_failure(
        self,
        embedding_provider: EmbeddingProvider,
        mock_embeddings: MagicMock,
    ) -> None:
        """Test a transient failure is retried transparently."""
        # Arrange
        mock_embeddings.aembed_query = AsyncMock(side_effect=[RuntimeError("blip"), [1.0, 0.0, 0.0]])

        # Act
        vector = await embedding_provider.embed("retry me")

        # Assert
        assert vector == [1.0, 0.0, 0.0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", None])
    async def test_embed_should_return_zero_vector_for_invalid_input(
        self,
        embedding_provider: EmbeddingProvider,
        mock_embeddings: MagicMock,
        text,
    ) -> None:
        """Test blank input never reaches the backend."""
        # Act
        result = await embedding_provider.embed_with_status(text)

        # Assert
        assert result.vector == [0.0, 0.0, 0.0]
        assert result.degraded_reason == "invalid input"
        mock_embeddings.aembed_query.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_embed_should_degrade_on_wrong_dimension(
        self,
        mock_embeddings: MagicMock,
    ) -> None:
        """Test a vector of the wrong length is treated as a failure."""
        # Arrange
        mock_embeddings.aembed_query = AsyncMock(return_value=[0.5, 0.5])
        provider = EmbeddingProvider(mock_embeddings, dimension=3, retry_max_attempts=1)

        # Act
        result = await provider.embed_with_status("text")

        # Assert
        assert result.is_degraded
        assert result.vector == [0.0, 0.0, 0.0]


class CoroutineEmbeddings:
    """Embeddings backend whose aembed_query is a real coroutine function."""

    def __init__(self, failures: int = 0) -> None:
        self.failures = failures
        self.queries: list[str] = []

    async def aembed_query(self, text: str) -> list[float]:
        self.queries.append(text)
        if len(self.queries) <= self.failures:
            raise ConnectionError("backend unavailable")
        return [float(len(text)), 1.0, 0.0]


class TestEmbeddingProviderCoroutineBackend:
    """Test suite for a provider wired to a coroutine-based backend."""

    @pytest.mark.asyncio
    async def test_embed_should_await_backend_coroutine(self) -> None:
        """Test the backend result is awaited and validated, not degraded."""
        # Arrange
        backend = CoroutineEmbeddings()
        provider = EmbeddingProvider(backend, dimension=3, retry_initial_delay=0)

        # Act
        result = await provider.embed_with_status("hello")

        # Assert
        assert result.is_degraded is False
        assert result.vector == [5.0, 1.0, 0.0]
        assert backend.queries == ["hello"]

    @pytest.mark.asyncio
    async def test_embed_should_retry_coroutine_backend(self) -> None:
        """Test two backend failures are retried before the third call succeeds."""
        # Arrange
        backend = CoroutineEmbeddings(failures=2)
        provider = EmbeddingProvider(backend, dimension=3, retry_max_attempts=3, retry_initial_delay=0)

        # Act
        vector = await provider.embed("abc")

        # Assert
        assert vector == [3.0, 1.0, 0.0]
        assert len(backend.queries) == 3
