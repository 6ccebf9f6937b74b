"""
Gemini embedding backend for the drive index.

Chunks and questions go through the same aembed_query call, so the backend
embeds both with one symmetric task type and one output dimension. The
vector index rejects records of a different length, and the provider's
zero-vector fallback is sized from the same setting.

Dependencies: langchain_google_genai
System role: Default embedding backend
"""

import logging
from typing import List

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)

# Questions and chunks share one embedding call
DEFAULT_TASK_TYPE = "SEMANTIC_SIMILARITY"


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    Gemini embeddings pinned to the index dimension.

    output_dimensionality passed to the constructor is not applied by
    GoogleGenerativeAIEmbeddings, so it is forwarded on every query call.
    """

    _output_dimensionality: int = 1024

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1024,
        **kwargs,
    ) -> None:
        """
        Args:
            model: Gemini embedding model
            output_dimensionality: Vector length of every chunk and question embedding
            **kwargs: Passed to GoogleGenerativeAIEmbeddings (task_type defaults
                to SEMANTIC_SIMILARITY)
        """
        kwargs.setdefault("task_type", DEFAULT_TASK_TYPE)
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Drive embeddings ready: model={model}, "
            f"dimension={output_dimensionality}, task_type={kwargs['task_type']}"
        )

    @property
    def dimension(self) -> int:
        return self._output_dimensionality

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> List[float]:
        return super().embed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )

    async def aembed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> List[float]:
        """Embed one chunk or question at the index dimension."""
        return await super().aembed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )
