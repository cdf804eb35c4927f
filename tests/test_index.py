import numpy as np
import pytest

from wordle_brute.errors import CacheReadFailure, UnknownWord
from wordle_brute.feedback import encode_pattern, evaluate, GRAY, GREEN
from wordle_brute.index import PatternIndex

from .conftest import SMALL_WORDS, TOY_WORDS


@pytest.fixture(scope="module")
def index():
    return PatternIndex.build(sorted(w.upper() for w in SMALL_WORDS))


def test_partitions_are_disjoint_and_cover_dictionary(index):
    everything = np.arange(index.n_words)
    for g in range(index.n_words):
        parts = [index.partition_indices(g, p) for p in range(index.n_patterns)]
        assert sum(len(p) for p in parts) == index.n_words
        assert np.array_equal(np.sort(np.concatenate(parts)), everything)


def test_partition_matches_evaluate(index):
    guess = "SLATE"
    for word in index.words:
        pattern = encode_pattern(evaluate(guess, word))
        assert word in index.partition(guess, pattern)


def test_partition_indices_ascending(index):
    for p in range(index.n_patterns):
        part = index.partition_indices(0, p)
        assert np.all(np.diff(part) > 0)


def test_empty_partition(index):
    all_gray = encode_pattern((GRAY,) * 5)
    all_green = encode_pattern((GREEN,) * 5)
    assert index.partition("CRANE", all_green) == frozenset({"CRANE"})
    assert index.partition("CRANE", index.n_patterns + 5) == frozenset()
    assert isinstance(index.partition("CRANE", all_gray), frozenset)


def test_count_matching_against_brute_force(index):
    candidates = ["CRANE", "TRACE", "GRAPE", "SLATE", "PLANT", "BRAVE"]
    for guess in ("CRANE", "SLATE", "MAGMA"):
        for answer in candidates:
            pattern = encode_pattern(evaluate(guess, answer))
            expected = sum(1 for c in candidates if encode_pattern(evaluate(guess, c)) == pattern)
            assert index.count_matching(guess, pattern, candidates) == expected
            assert index.count_matching(guess, pattern, index.indices_of(candidates)) == expected


def test_filter_keeps_consistent_candidates(index):
    candidates = np.arange(index.n_words, dtype=np.int32)
    guess = index.index_of("SLATE")
    pattern = index.feedback("SLATE", "CRANE")
    remaining = index.filter(guess, pattern, candidates)
    words = index.to_words(remaining)
    assert "CRANE" in words
    assert all(index.feedback("SLATE", w) == pattern for w in words)
    assert len(remaining) < index.n_words


def test_partition_sizes_cover_candidates(index):
    guess = index.index_of("CRANE")
    candidates = np.arange(0, index.n_words, 2, dtype=np.int32)
    sizes = [len(index.filter(guess, p, candidates)) for p in range(index.n_patterns)]
    assert sum(sizes) == len(candidates)
    assert sizes[index.n_patterns - 1] == (1 if guess in candidates else 0)


def test_unknown_word(index):
    with pytest.raises(UnknownWord):
        index.index_of("ZZZZZ")
    with pytest.raises(UnknownWord):
        index.index_of(10_000)


def test_index_is_read_only(index):
    with pytest.raises(ValueError):
        index.matrix[0, 0] = 0


def test_save_and_load(tmp_path):
    words = sorted(TOY_WORDS)
    index = PatternIndex.build(words)
    path = str(tmp_path / "matrix.npz")
    index.save(path)
    assert PatternIndex.exists(path)

    loaded = PatternIndex.load(path, words)
    assert np.array_equal(loaded.matrix, index.matrix)
    assert loaded.words == index.words


def test_save_appends_extension(tmp_path):
    words = sorted(TOY_WORDS)
    path = str(tmp_path / "matrix")
    PatternIndex.build(words).save(path)
    assert (tmp_path / "matrix.npz").exists()
    assert PatternIndex.load(path, words).n_words == len(words)


def test_load_rejects_other_word_list(tmp_path):
    path = str(tmp_path / "matrix.npz")
    PatternIndex.build(sorted(TOY_WORDS)).save(path)
    with pytest.raises(CacheReadFailure):
        PatternIndex.load(path, sorted(TOY_WORDS)[:-1])
    with pytest.raises(CacheReadFailure):
        PatternIndex.load(path, sorted(TOY_WORDS), label_all_dupes=True)


def test_load_rejects_garbage(tmp_path):
    path = tmp_path / "matrix.npz"
    path.write_text("not a matrix")
    with pytest.raises(CacheReadFailure):
        PatternIndex.load(str(path), sorted(TOY_WORDS))


def test_load_rejects_truncated_file(tmp_path):
    path = tmp_path / "matrix.npz"
    PatternIndex.build(sorted(TOY_WORDS)).save(str(path))
    data = path.read_bytes()
    path.write_bytes(data[:len(data) // 2])
    with pytest.raises(CacheReadFailure):
        PatternIndex.load(str(path), sorted(TOY_WORDS))
