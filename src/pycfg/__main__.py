# -*- encoding: utf-8 -*-
# @File   : __main__.py
# @Time   : 2026/10/18 16:21:54
# @Author : pycfg contributors

"""`python -m pycfg some.cfg`: parse, report, dump."""

import argparse
import logging
import sys
from time import perf_counter
from typing import Sequence

from .cfg import CfgParser
from .export import dump_json, dump_yaml


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog='pycfg', description='Parse a CFG file (and its includes).')
    ap.add_argument('file', help='root CFG file')
    ap.add_argument('-b', '--base-path', default='',
                    help='directory `#include <...>` is resolved against')
    ap.add_argument('-e', '--encoding', default=None,
                    help='file encoding, guessed when omitted')
    ap.add_argument('-f', '--format', choices=('cfg', 'json', 'yaml'),
                    default=None, help='dump the parsed sections')
    ap.add_argument('-q', '--query', nargs=2, metavar=('SECTION', 'KEY'),
                    help='print the value of KEY in SECTION')
    ap.add_argument('-t', '--time', action='store_true',
                    help='print how long parsing took')
    ap.add_argument('-s', '--silent', action='store_true',
                    help='do not print parse messages')
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.silent:
        logging.getLogger('pycfg').setLevel(logging.ERROR)

    begin = perf_counter()
    cfg = CfgParser(
        args.file, base_path=args.base_path, encoding=args.encoding)
    elapsed = perf_counter() - begin

    if args.time:
        print(f'Elapsed time: {elapsed * 1000:.0f} ms')
    if args.query:
        print(cfg.get_string(*args.query))

    match args.format:
        case 'cfg':
            sys.stdout.write(cfg.dumps())
        case 'json':
            dump_json(cfg.get_section_data(), sys.stdout)
            sys.stdout.write('\n')
        case 'yaml':
            dump_yaml(cfg.get_section_data(), sys.stdout)
    return 0


if __name__ == '__main__':
    sys.exit(main())
