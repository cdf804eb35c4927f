"""Command-line entry point: benchmark the solver over a word list."""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .benchmark import print_results, results_to_json, sample_targets, benchmark
from .config import Config
from .engine import POOLS, Engine
from .errors import WordleError
from .selector import METRICS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='wordle-brute',
        description="Brute-force Wordle solver and benchmark. Defaults come "
                    "from WORDLE_* environment variables (or a .env file).",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--dictionary', '-d', help="Word list, one word per line")
    parser.add_argument('--cache', help="First-guess cache file")
    parser.add_argument('--no-cache', action='store_true', help="Don't read or write the first-guess cache")
    parser.add_argument('--matrix-cache', help="Feedback matrix cache (.npz)")
    parser.add_argument('--sample', '-n', type=int, help="Solve N random words instead of all of them")
    parser.add_argument('--seed', type=int, help="Seed for --sample")
    parser.add_argument('--target', '-t', action='append', default=[],
                        help="Solve just this word (repeatable)")
    parser.add_argument('--label-all-dupes', action='store_true', default=None,
                        help="Easy mode: every repeated letter present in the target is yellow")
    parser.add_argument('--pool', choices=POOLS, help="Guess pool for rounds after the first")
    parser.add_argument('--full-pool-round', type=int, action='append', dest='full_pool_rounds',
                        help="Round that guesses from the whole dictionary when --pool=candidates")
    parser.add_argument('--metric', choices=METRICS, help="Guess scoring")
    parser.add_argument('--word-length', type=int, help="Letters per word")
    parser.add_argument('--strict', action='store_true', default=None,
                        help="Fail on malformed words instead of skipping them")
    parser.add_argument('--json', action='store_true', help="Print results as JSON")
    parser.add_argument('--verbose', '-v', action='store_true', default=None,
                        help="Print every guess of every game")
    return parser


def apply_args(config: Config, args: argparse.Namespace) -> Config:
    """Override config settings with any flags given on the command line."""
    overrides = {
        'DICTIONARY_PATH': args.dictionary,
        'CACHE_PATH': args.cache,
        'MATRIX_CACHE_PATH': args.matrix_cache,
        'SAMPLE': args.sample,
        'SEED': args.seed,
        'LABEL_ALL_DUPES': args.label_all_dupes,
        'POOL': args.pool,
        'METRIC': args.metric,
        'WORD_LENGTH': args.word_length,
        'STRICT': args.strict,
        'VERBOSE': args.verbose,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(config, name, value)
    if args.full_pool_rounds:
        config.FULL_POOL_ROUNDS = tuple(args.full_pool_rounds)
    if args.no_cache:
        config.CACHE_PATH = None
    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = apply_args(Config(), args)
    except WordleError as e:
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
        logger.error("%s", e)
        return 1

    loglevel = logging.DEBUG if config.VERBOSE else logging.INFO
    logging.basicConfig(level=loglevel, format='%(levelname)s: %(message)s')

    try:
        engine = Engine.from_config(config)
        if args.target:
            targets = [engine.words[engine.index.index_of(t)] for t in args.target]
        else:
            targets = sample_targets(engine.words, config.SAMPLE, config.SEED)
        results = benchmark(engine, targets, verbose=config.VERBOSE,
                            progress_every=0 if args.json else 500)
    except WordleError as e:
        logger.error("%s", e)
        return 1

    if args.json:
        print(results_to_json(results))
    else:
        print_results(results)
    return 0


if __name__ == '__main__':
    sys.exit(main())
