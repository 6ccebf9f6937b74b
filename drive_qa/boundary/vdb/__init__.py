"""
Vector database boundary layer.

Provides the in-memory vector index used for retrieval.

Dependencies: numpy
System role: Vector store adapter for RAG retrieval
"""

from drive_qa.boundary.vdb.vector_index import IndexState, VectorIndex, cosine_similarity

__all__ = ["IndexState", "VectorIndex", "cosine_similarity"]
