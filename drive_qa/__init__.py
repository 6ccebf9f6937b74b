"""
Drive QA.

Retrieval-augmented question answering over cloud-drive documents.
"""

__version__ = "0.1.0"
