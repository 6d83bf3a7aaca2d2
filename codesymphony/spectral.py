from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

_LOGGER = logging.getLogger("codesymphony.spectral")

_TOKEN_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*|\d+(?:\.\d+)?|[^\sA-Za-z0-9_]")
_DEFAULT_TOP_K = 5
_DEFAULT_MAX_NODES = 256


@runtime_checkable
class EigenvalueExtractor(Protocol):
    def extract_top_eigenvalues(self, code: str) -> Sequence[float]: ...


def tokenize(code: str) -> list[str]:
    return _TOKEN_PATTERN.findall(code)


class GraphSpectralHasher:
    """Spectral fingerprint of a code string.

    Tokens become graph nodes; each pair of consecutive tokens adds weight
    to the edge between them. The fingerprint is the ``top_k`` largest
    eigenvalues of the graph Laplacian, which are always >= 0.
    """

    def __init__(self, *, top_k: int = _DEFAULT_TOP_K, max_nodes: int = _DEFAULT_MAX_NODES) -> None:
        if top_k < 1:
            raise ValueError("top_k must be >= 1")
        if max_nodes < 1:
            raise ValueError("max_nodes must be >= 1")
        self.top_k = top_k
        self.max_nodes = max_nodes

    def _vocabulary(self, tokens: Sequence[str]) -> dict[str, int]:
        # Most frequent tokens first; ties keep first-seen order.
        counts = Counter(tokens)
        ranked = sorted(counts, key=lambda token: -counts[token])
        return {token: index for index, token in enumerate(ranked[: self.max_nodes])}

    def adjacency(self, code: str) -> NDArray[np.float64]:
        tokens = tokenize(code)
        vocabulary = self._vocabulary(tokens)
        size = len(vocabulary)
        matrix: NDArray[np.float64] = np.zeros((size, size), dtype=np.float64)
        for left, right in zip(tokens, tokens[1:]):
            i = vocabulary.get(left)
            j = vocabulary.get(right)
            if i is None or j is None or i == j:
                continue
            matrix[i, j] += 1.0
            matrix[j, i] += 1.0
        return matrix

    def extract_top_eigenvalues(self, code: str) -> list[float]:
        adjacency = self.adjacency(code)
        if adjacency.size == 0:
            return []
        laplacian = np.diag(adjacency.sum(axis=1)) - adjacency
        eigenvalues = np.linalg.eigvalsh(laplacian)
        # Laplacians are PSD; anything below zero is float noise.
        eigenvalues = np.clip(eigenvalues, 0.0, None)
        top = sorted((float(value) for value in eigenvalues), reverse=True)[: self.top_k]
        _LOGGER.debug("Spectral hash over %d nodes -> %s", adjacency.shape[0], top)
        return top
