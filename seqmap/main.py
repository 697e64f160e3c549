#!python
import argparse
import logging
import os
import platform
import sys
import time
from typing import List, Optional

from . import __version__
from . import util as _util
from .annotate.file_io import load_annotations, load_sequence
from .annotate.selection import SelectionDomain
from .constants import PROGNAME, SeqMapNamespace, cast_boolean
from .editor import DEFAULT_ZOOM, MIN_ZOOM
from .illustrate.constants import DiagramSettings
from .illustrate.draw import draw_circular_map, draw_linear_map
from .interval import Span

SUBCOMMAND = SeqMapNamespace(LINEAR='linear', CIRCULAR='circular')


def create_parser(argv):
    parser = argparse.ArgumentParser(prog=PROGNAME, allow_abbrev=False)
    parser.add_argument(
        '-v',
        '--version',
        action='version',
        version='%(prog)s version ' + __version__,
        help='Outputs the version number',
    )
    subp = parser.add_subparsers(dest='command', help='specifies which view of the sequence to draw')
    subp.required = True
    required = {}
    optional = {}
    for command in SUBCOMMAND.values():
        subparser = subp.add_parser(command, add_help=False, allow_abbrev=False)
        required[command] = subparser.add_argument_group('required arguments')
        optional[command] = subparser.add_argument_group('optional arguments')
        optional[command].add_argument('-h', '--help', action='help', help='show this help message and exit')
        optional[command].add_argument('--log', help='redirect logging to a log file', default=None)
        optional[command].add_argument(
            '--log_level',
            help='level of logging to output',
            choices=['INFO', 'DEBUG'],
            default='INFO',
        )
        required[command].add_argument(
            '-s', '--sequence', required=True, help='path to the fasta file of the sequence', metavar='FILEPATH'
        )
        required[command].add_argument(
            '-o', '--output', required=True, help='path to the svg file to write', metavar='FILEPATH'
        )
        optional[command].add_argument(
            '-n',
            '--annotations',
            nargs='+',
            default=[],
            help='path to the annotation json files',
            metavar='FILEPATH',
        )
        optional[command].add_argument('--name', help='the sequence record to draw, defaults to the first')
        optional[command].add_argument('--title', help='title drawn on the map, defaults to the sequence name')
        optional[command].add_argument(
            '--interchange',
            type=cast_boolean,
            default=False,
            help='the annotation and selection spans use the 1-based interchange notation',
        )
        optional[command].add_argument('--selection', help='span of the region(s) to highlight', default=None)

    optional[SUBCOMMAND.LINEAR].add_argument(
        '--zoom', type=int, default=DEFAULT_ZOOM, help='number of bases drawn on each line'
    )
    optional[SUBCOMMAND.LINEAR].add_argument(
        '--width', type=int, default=None, help='width in pixels of the drawing'
    )
    optional[SUBCOMMAND.CIRCULAR].add_argument(
        '--zoom_scale', type=float, default=1, help='scale applied to the radius of the backbone'
    )
    optional[SUBCOMMAND.CIRCULAR].add_argument(
        '--origin_offset', type=float, default=0, help='rotation of the sequence origin in radians'
    )
    return parser, parser.parse_args(argv)


def parse_selection(text, interchange=False):
    if text is None:
        return None
    if interchange:
        return SelectionDomain(Span.from_interchange(text))
    return SelectionDomain(text)


def main(argv: Optional[List[str]] = None):
    """
    sets up the parser, loads the sequence and annotation files and draws the requested view

    Args:
        argv: List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)

    log_conf = {'format': '{message}', 'style': '{', 'level': args.log_level}

    original_logging_handlers = logging.root.handlers[:]
    for handler in original_logging_handlers:
        logging.root.removeHandler(handler)
    if args.log:
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    _util.logger.info(f'{PROGNAME}: {__version__}')
    _util.logger.info(f'hostname: {platform.node()}')
    _util.log_arguments(args)

    try:
        name, sequence = load_sequence(args.sequence, args.name)
        annotations = load_annotations(*args.annotations, interchange=args.interchange)
        selection = parse_selection(args.selection, args.interchange)
        title = args.title if args.title is not None else name

        if args.command == SUBCOMMAND.LINEAR:
            settings = DiagramSettings(width=args.width) if args.width else DiagramSettings()
            zoom = max(MIN_ZOOM, args.zoom)
            canvas = draw_linear_map(settings, sequence, annotations, zoom, selection=selection, title=title)
        else:
            canvas = draw_circular_map(
                DiagramSettings(),
                len(sequence),
                annotations,
                zoom_scale=args.zoom_scale,
                origin_offset=args.origin_offset,
                selection=selection,
                title=title,
            )
        if os.path.dirname(args.output):
            _util.mkdirp(os.path.dirname(args.output))
        _util.logger.info(f'writing: {args.output}')
        canvas.saveas(args.output)
        _util.logger.info(f'run time (s): {int(time.time()) - start_time}')
    except Exception as err:
        if args.log:
            _util.logger.exception(err)
        raise err
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
        for handler in original_logging_handlers:
            logging.root.addHandler(handler)


if __name__ == '__main__':
    main()
