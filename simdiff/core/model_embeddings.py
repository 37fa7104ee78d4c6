"""
Optional embedding provider backed by sentence-transformers.

The comparison engine defaults to the local feature-hashing embedder.
This provider is for callers who want model-based vectors instead and
have installed the `models` extra (pip install simdiff[models]).

The caller constructs the provider and passes it to compare_documents();
nothing here is cached at module level, so two providers never share a
model and dropping the provider frees the model.

Embedding Behavior:
- Embeddings are L2-normalized by sentence-transformers
- Models load on construction; the first load downloads the weights
  into the sentence-transformers cache
"""

from typing import List, Sequence

import numpy as np
from sentence_transformers import SentenceTransformer

from simdiff.core.embeddings import EmbeddingError
from simdiff.core.models import Vector


# Compact model with the same 384 dimensions as the hashing embedder
DEFAULT_MODEL = "sentence-transformers/all-MiniLM-L6-v2"


class SentenceTransformerEmbedder:
    """
    Embedding provider wrapping a loaded SentenceTransformer model.

    Args:
        model_name: Name or path of the sentence-transformer model
        model: Already-loaded model to wrap instead of loading by name

    Raises:
        EmbeddingError: If the model cannot be loaded
    """

    def __init__(self, model_name: str = DEFAULT_MODEL, model=None):
        if model is None:
            try:
                model = SentenceTransformer(model_name)
            except Exception as e:
                raise EmbeddingError(f"Failed to load model '{model_name}': {e}")
        self._model = model
        self.name = model_name
        self.dimension = model.get_sentence_embedding_dimension()

    def embed(self, text: str) -> Vector:
        """
        Embed a single text.

        Raises:
            EmbeddingError: If text is empty or encoding fails
        """
        if not text or not text.strip():
            raise EmbeddingError("Cannot embed empty text")
        try:
            embedding = self._model.encode(
                text,
                convert_to_numpy=True,
                normalize_embeddings=True,
            )
            return embedding.astype(np.float32)
        except Exception as e:
            raise EmbeddingError(f"Failed to generate embedding: {e}")

    def embed_many(self, texts: Sequence[str], batch_size: int = 32) -> List[Vector]:
        """
        Embed several texts in one encode() call.

        Faster than embed() in a loop, but a single bad text fails the
        whole call; embed_texts() uses embed() so failures stay local.
        """
        try:
            embeddings = self._model.encode(
                list(texts),
                convert_to_numpy=True,
                normalize_embeddings=True,
                batch_size=batch_size,
                show_progress_bar=False,
            )
            return [emb.astype(np.float32) for emb in embeddings]
        except Exception as e:
            raise EmbeddingError(f"Failed to generate embeddings: {e}")

    def __repr__(self) -> str:
        return f"SentenceTransformerEmbedder(model_name={self.name!r})"
