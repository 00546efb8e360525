"""Context RAG: document retrieval and answer synthesis per context."""

__version__ = "0.1.0"
