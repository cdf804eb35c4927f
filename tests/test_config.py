import json

import pytest

from wordle_brute.cli import main
from wordle_brute.config import Config
from wordle_brute.errors import ConfigError

from .conftest import TOY_WORDS


def test_defaults():
    config = Config({})
    assert config.DICTIONARY_PATH == 'words.txt'
    assert config.CACHE_PATH == 'first_guess.txt'
    assert config.MATRIX_CACHE_PATH is None
    assert config.SAMPLE is None
    assert config.SEED == 42
    assert config.LABEL_ALL_DUPES is False
    assert config.POOL == 'dictionary'
    assert config.FULL_POOL_ROUNDS == ()
    assert config.WORD_LENGTH == 5


def test_environment_values():
    config = Config({
        'WORDLE_DICTIONARY': 'answers.txt',
        'WORDLE_CACHE': '',
        'WORDLE_SAMPLE': '100',
        'WORDLE_SEED': '7',
        'WORDLE_LABEL_ALL_DUPES': 'yes',
        'WORDLE_VERBOSE': 'true',
        'WORDLE_POOL': 'candidates',
        'WORDLE_FULL_POOL_ROUNDS': '3, 4',
        'WORDLE_METRIC': 'worst',
    })
    assert config.DICTIONARY_PATH == 'answers.txt'
    assert config.CACHE_PATH is None
    assert config.SAMPLE == 100
    assert config.SEED == 7
    assert config.LABEL_ALL_DUPES is True
    assert config.VERBOSE is True
    assert config.POOL == 'candidates'
    assert config.FULL_POOL_ROUNDS == (3, 4)
    assert config.METRIC == 'worst'


@pytest.mark.parametrize("env", [
    {'WORDLE_SAMPLE': 'lots'},
    {'WORDLE_SAMPLE': '0'},
    {'WORDLE_VERBOSE': 'maybe'},
    {'WORDLE_POOL': 'everything'},
    {'WORDLE_METRIC': 'entropy'},
    {'WORDLE_FULL_POOL_ROUNDS': '0'},
    {'WORDLE_WORD_LENGTH': '-1'},
])
def test_invalid_values(env):
    with pytest.raises(ConfigError):
        Config(env)


@pytest.fixture
def toy_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(TOY_WORDS) + "\n")
    return str(path)


def test_cli_json(toy_file, capsys):
    assert main(['--dictionary', toy_file, '--no-cache', '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['total'] == 5
    assert data['first_guess'] == 'PLATE'
    assert data['max'] == 2


def test_cli_targets_and_report(toy_file, tmp_path, capsys):
    cache = str(tmp_path / "first.txt")
    assert main(['-d', toy_file, '--cache', cache, '-t', 'crane', '-t', 'slate']) == 0
    out = capsys.readouterr().out
    assert "Words tested: 2" in out
    assert "Maximum # of guesses: 2" in out
    assert (tmp_path / "first.txt").read_text() == "PLATE\nmetric=total dupes=standard\n"


def test_cli_sample(toy_file, capsys):
    assert main(['-d', toy_file, '--no-cache', '--sample', '3', '--seed', '1', '--json']) == 0
    assert json.loads(capsys.readouterr().out)['total'] == 3


def test_cli_missing_dictionary(tmp_path):
    assert main(['--dictionary', str(tmp_path / "missing.txt"), '--no-cache']) == 1


def test_cli_unknown_target(toy_file):
    assert main(['-d', toy_file, '--no-cache', '-t', 'jazzy']) == 1


def test_cli_bad_flag_value(toy_file):
    assert main(['-d', toy_file, '--no-cache', '--sample', '-2']) == 1


def test_cli_unwritable_matrix_cache(toy_file, tmp_path, capsys, caplog):
    matrix = str(tmp_path / "nodir" / "matrix.npz")
    assert main(['-d', toy_file, '--no-cache', '--json', '--matrix-cache', matrix]) == 0
    assert json.loads(capsys.readouterr().out)['total'] == 5
    assert "Couldn't store feedback matrix" in caplog.text
