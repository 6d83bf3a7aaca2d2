import pytest

from codesymphony.spectral import EigenvalueExtractor, GraphSpectralHasher, tokenize

SNIPPET = """
def add(a, b):
    return a + b

def multiply(a, b):
    return a * b
"""


def test_tokenize_splits_identifiers_numbers_and_punctuation() -> None:
    assert tokenize("x1 = foo(2.5)") == ["x1", "=", "foo", "(", "2.5", ")"]


def test_empty_code_has_empty_spectrum() -> None:
    assert GraphSpectralHasher().extract_top_eigenvalues("") == []
    assert GraphSpectralHasher().extract_top_eigenvalues("   \n\t") == []


def test_single_token_has_zero_eigenvalue() -> None:
    assert GraphSpectralHasher().extract_top_eigenvalues("x") == [0.0]


def test_two_linked_tokens() -> None:
    eigenvalues = GraphSpectralHasher().extract_top_eigenvalues("a b")
    assert eigenvalues == pytest.approx([2.0, 0.0], abs=1e-9)


def test_spectrum_is_ranked_and_non_negative() -> None:
    eigenvalues = GraphSpectralHasher(top_k=4).extract_top_eigenvalues(SNIPPET)
    assert len(eigenvalues) == 4
    assert eigenvalues == sorted(eigenvalues, reverse=True)
    assert all(value >= 0.0 for value in eigenvalues)


def test_spectrum_is_deterministic() -> None:
    hasher = GraphSpectralHasher()
    assert hasher.extract_top_eigenvalues(SNIPPET) == hasher.extract_top_eigenvalues(SNIPPET)


def test_max_nodes_caps_graph_size() -> None:
    hasher = GraphSpectralHasher(max_nodes=3)
    assert hasher.adjacency(SNIPPET).shape == (3, 3)


def test_rejects_bad_parameters() -> None:
    with pytest.raises(ValueError):
        GraphSpectralHasher(top_k=0)
    with pytest.raises(ValueError):
        GraphSpectralHasher(max_nodes=0)


def test_satisfies_extractor_protocol() -> None:
    assert isinstance(GraphSpectralHasher(), EigenvalueExtractor)
