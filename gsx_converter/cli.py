"""
Command line entry point.

    convert --input KJFK.ini [--output out.json] [--verbose] [--gates-csv gates.csv]

Exit codes: 0 success, 1 usage/help, 2 missing --input, 3 conversion
failure, 4 unsupported input extension, 5 override without its base file.
"""

import sys
import locale
import argparse
import logging
from typing import List, Optional

from .converter import convert_file, supported_extensions
from .exceptions import ConversionError
from .export import write_gates_csv

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_MISSING_INPUT = 2
EXIT_FAILURE = 3

HELP_FLAGS = ('-h', '--help', '/?')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='convert',
        description='Convert GSX airport profiles into a canonical JSON document',
        add_help=False,
    )
    parser.add_argument('-i', '--input', help=f"Input file ({', '.join(supported_extensions())})")
    parser.add_argument('-o', '--output', help='Output JSON file (default: <input>.canonical.json)')
    parser.add_argument('--gates-csv', help='Also write a per-gate CSV summary')
    parser.add_argument('-v', '--verbose', help='Verbose output', action='store_true')
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def use_system_locale() -> None:
    """Parse numbers with the user's decimal separator when invariant parsing fails."""
    try:
        locale.setlocale(locale.LC_NUMERIC, '')
    except locale.Error as e:
        logger.debug(f"Keeping the C numeric locale: {e}")


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()

    if not argv or any(arg in HELP_FLAGS for arg in argv):
        parser.print_help()
        return EXIT_USAGE

    try:
        args = parser.parse_args(argv)
    except SystemExit:
        # argparse already printed the usage error
        return EXIT_USAGE

    configure_logging(args.verbose)
    use_system_locale()

    if not args.input:
        logger.error("Missing required argument --input")
        parser.print_usage(sys.stderr)
        return EXIT_MISSING_INPUT

    try:
        result = convert_file(args.input, args.output)
        if args.gates_csv:
            write_gates_csv(result.config, args.gates_csv)
    except ConversionError as e:
        if args.verbose:
            logger.exception(str(e))
        else:
            logger.error(str(e))
        return e.exit_code
    except Exception as e:
        if args.verbose:
            logger.exception(f"Conversion failed: {e}")
        else:
            logger.error(f"Conversion failed: {e}")
        return EXIT_FAILURE

    logger.info(result.summary())
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
