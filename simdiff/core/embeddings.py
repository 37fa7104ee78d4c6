"""
Sentence fingerprints via feature hashing.

This module converts a sentence into a fixed-length vector without any
external model. It is a lexical surrogate for a semantic embedding:
sentences that share words and character trigrams end up pointing in
similar directions, so cosine similarity rises with lexical overlap.

Vector Layout (D = dimension, T = D // 3):
- [0, T):        bag-of-words, each distinct word adds freq / word_count
                 at hash(word) % T
- [T, 2T):       character trigrams, each adds 1 / trigram_count
                 at T + hash(trigram) % T
- [2T, 2T + 5):  length / 1000, word count / 100, letter ratio,
                 digit ratio, long-word (> 5 chars) ratio
- [2T + 5, D):   ord() of the leading characters / 1000

The whole vector is then L2-normalized. Hash collisions are accepted and
simply add up in the shared slot.

Limitations:
- Genuine paraphrases with no shared vocabulary score low
- Word order only matters through trigrams and the leading characters

Embedding never fails a batch. If a sentence cannot be embedded the
zero vector is returned in its place and a warning is logged; a zero
vector scores 0.0 against everything.
"""

import logging
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

import numpy as np

from simdiff.core.models import Vector


logger = logging.getLogger(__name__)

# 384 matches common compact sentence-embedding models, so vectors from
# either kind of provider have the same shape.
DEFAULT_DIMENSION = 384

# Band C: length, word count, letter ratio, digit ratio, long-word ratio
STATISTIC_SLOTS = 5

NGRAM_SIZE = 3
LONG_WORD_CHARS = 5
LENGTH_SCALE = 1000.0
WORD_COUNT_SCALE = 100.0
CHAR_CODE_SCALE = 1000.0


class EmbeddingError(Exception):
    """Raised when an embedding provider cannot embed a text."""
    pass


@dataclass
class EmbeddingConfig:
    """
    Configuration for batch embedding.

    Attributes:
        dimension: Vector length for the default hashing embedder (default: 384)
        batch_size: Texts submitted per batch (default: 10)
        max_workers: Threads embedding concurrently within a batch (default: 4)
        batch_pause: Seconds to wait between batches; set this for
            rate-limited remote providers (default: 0.0)
    """
    dimension: int = DEFAULT_DIMENSION
    batch_size: int = 10
    max_workers: int = 4
    batch_pause: float = 0.0


DEFAULT_EMBEDDING_CONFIG = EmbeddingConfig()


class EmbeddingProvider(Protocol):
    """Anything that can turn one sentence into a vector."""

    name: str
    dimension: int

    def embed(self, text: str) -> Vector:
        ...


def _validate_dimension(dimension: int) -> None:
    if dimension - 2 * (dimension // 3) < STATISTIC_SLOTS:
        raise ValueError(
            f"Dimension {dimension} is too small for the feature layout"
        )


def rolling_hash(token: str) -> int:
    """
    32-bit polynomial rolling hash (h = h * 31 + code point).

    The running value wraps to a signed 32-bit integer; the absolute
    value is returned so it can be used directly with %.
    """
    h = 0
    for char in token:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def normalize_for_embedding(text: str) -> str:
    """Lowercase, trim and collapse whitespace."""
    return " ".join(text.lower().split())


def character_ngrams(text: str, n: int = NGRAM_SIZE) -> List[str]:
    """All overlapping n-character windows of text, in order."""
    return [text[i:i + n] for i in range(len(text) - n + 1)]


def _feature_vector(text: str, dimension: int) -> Vector:
    normalized = normalize_for_embedding(text)
    words = normalized.split()
    band = dimension // 3
    vector = np.zeros(dimension, dtype=np.float64)

    # Band A: bag of words
    if words:
        for word, freq in Counter(words).items():
            vector[rolling_hash(word) % band] += freq / len(words)

    # Band B: character trigrams
    ngrams = character_ngrams(normalized)
    for ngram in ngrams:
        vector[band + rolling_hash(ngram) % band] += 1.0 / len(ngrams)

    # Band C: text statistics
    stats = 2 * band
    char_count = len(normalized)
    vector[stats] = char_count / LENGTH_SCALE
    vector[stats + 1] = len(words) / WORD_COUNT_SCALE
    if char_count:
        vector[stats + 2] = sum(1 for c in normalized if "a" <= c <= "z") / char_count
        vector[stats + 3] = sum(1 for c in normalized if "0" <= c <= "9") / char_count
    if words:
        long_words = sum(1 for w in words if len(w) > LONG_WORD_CHARS)
        vector[stats + 4] = long_words / len(words)

    # Leading characters fill whatever is left
    offset = stats + STATISTIC_SLOTS
    for i, char in enumerate(normalized[:dimension - offset]):
        vector[offset + i] = ord(char) / CHAR_CODE_SCALE

    if not np.all(np.isfinite(vector)):
        raise EmbeddingError("Feature vector contains non-finite values")

    magnitude = np.linalg.norm(vector)
    if magnitude > 0:
        vector = vector / magnitude

    return vector.astype(np.float32)


def embed_text(text: str, dimension: int = DEFAULT_DIMENSION) -> Vector:
    """
    Generate the feature-hashing fingerprint for a single text.

    Deterministic: the same text always yields a bit-identical vector.
    The empty string yields the zero vector.

    Args:
        text: Sentence to embed
        dimension: Vector length

    Returns:
        L2-normalized float32 vector of length `dimension` (or zeros)

    Raises:
        ValueError: If dimension is too small for the feature layout
    """
    _validate_dimension(dimension)
    try:
        return _feature_vector(text, dimension)
    except Exception as e:
        logger.warning("Embedding degraded to zero vector: %s", e)
        return np.zeros(dimension, dtype=np.float32)


class HashingEmbedder:
    """
    Default provider: local, deterministic feature hashing.

    Holds no state beyond its dimension, so one instance can be shared
    across threads.
    """

    def __init__(self, dimension: int = DEFAULT_DIMENSION):
        _validate_dimension(dimension)
        self.dimension = dimension
        self.name = f"feature-hash-{dimension}"

    def embed(self, text: str) -> Vector:
        return embed_text(text, dimension=self.dimension)

    def __repr__(self) -> str:
        return f"HashingEmbedder(dimension={self.dimension})"


def _embed_or_degrade(provider: EmbeddingProvider, text: str, index: int) -> Vector:
    """Embed one text, substituting the zero vector if the provider fails."""
    try:
        vector = provider.embed(text)
        if vector is None:
            raise EmbeddingError("provider returned no vector")
        vector = np.asarray(vector, dtype=np.float32)
        if not np.all(np.isfinite(vector)):
            raise EmbeddingError("provider returned non-finite values")
        return vector
    except Exception as e:
        logger.warning(
            "Embedding degraded for sentence %d (%s): %s", index, provider.name, e
        )
        return np.zeros(provider.dimension, dtype=np.float32)


def embed_texts(
    texts: Sequence[str],
    provider: Optional[EmbeddingProvider] = None,
    config: Optional[EmbeddingConfig] = None,
) -> List[Vector]:
    """
    Embed many texts, in batches, with a small thread pool.

    Each result is written back by index, so the output order always
    matches the input order. A failure on one text degrades only that
    text to the zero vector.

    Args:
        texts: Texts to embed
        provider: Embedding provider (default: HashingEmbedder)
        config: Batch settings (default: DEFAULT_EMBEDDING_CONFIG)

    Returns:
        List of vectors, same order as texts
    """
    config = config or DEFAULT_EMBEDDING_CONFIG
    provider = provider or HashingEmbedder(config.dimension)
    batch_size = max(1, config.batch_size)

    if not texts:
        return []

    vectors: List[Optional[Vector]] = [None] * len(texts)

    with ThreadPoolExecutor(max_workers=max(1, config.max_workers)) as executor:
        for start in range(0, len(texts), batch_size):
            indices = range(start, min(start + batch_size, len(texts)))
            futures = {
                i: executor.submit(_embed_or_degrade, provider, texts[i], i)
                for i in indices
            }
            for i, future in futures.items():
                vectors[i] = future.result()

            if config.batch_pause > 0 and start + batch_size < len(texts):
                time.sleep(config.batch_pause)

    return vectors
