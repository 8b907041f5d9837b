"""
Console front-end for gridlatlon.

Usage:
    gridlatlon                              # Interactive menu
    gridlatlon utm 651409.903 313177.270 30 # One UTM conversion (add --south for S)
    gridlatlon bng 530000 180000            # One National Grid conversion
    gridlatlon demo                         # Worked examples
"""

__all__ = ['main', 'run_interactive']

import argparse
import sys
from typing import Callable, List, Optional, TextIO

from gridlatlon.conversion import convert_bng_to_latlon, convert_utm_to_latlon
from gridlatlon.coordinates import Coordinate
from gridlatlon.exceptions import ConvergenceError
from gridlatlon.utils.logging import set_verbose

_MENU = (
    '\nSelect coordinate system:\n'
    '1. UTM\n'
    '2. British National Grid (BNG)\n'
    '3. Exit'
)


def parse_hemisphere(answer: str) -> bool:
    """Interprets a Y/N answer to 'Northern Hemisphere?'"""
    answer = answer.strip().upper()
    if answer in ('Y', 'YES'):
        return True
    if answer in ('N', 'NO'):
        return False

    raise ValueError(f"Expected Y or N, got '{answer}'")


def print_result(result: Coordinate, output: TextIO):
    """
    Writes a converted coordinate and its map link.

    Args:
        result:
            The converted coordinate

        output:
            The stream written to
    """
    print(f'\nResult: {result.to_str()}', file=output)
    print(f'Google Maps: {result.map_url()}', file=output)


def run_demo(output: TextIO):
    """
    Prints a worked example for each grid: a UTM zone 30N reference and a
    National Grid reference in central London.

    Args:
        output:
            The stream written to
    """
    print('Example 1: UTM Conversion', file=output)
    print('-------------------------', file=output)
    easting, northing, zone = 651409.903, 313177.270, 30
    result = convert_utm_to_latlon(easting, northing, zone, True)
    print(f'Input: UTM Zone {zone}N', file=output)
    print(f'Easting: {easting:.3f} m, Northing: {northing:.3f} m', file=output)
    print(f'Output: {result.to_str()}\n', file=output)

    print('Example 2: British National Grid (BNG) Conversion', file=output)
    print('--------------------------------------------------', file=output)
    easting, northing = 530000.0, 180000.0
    result = convert_bng_to_latlon(easting, northing)
    print(f'Input: Easting: {easting:.3f} m, Northing: {northing:.3f} m', file=output)
    print(f'Output: {result.to_str()}\n', file=output)


def run_interactive(
    input_fn: Optional[Callable[[str], str]] = None,
    output: Optional[TextIO] = None,
):
    """
    Runs the menu loop until the user exits (or input is exhausted).

    Bad numeric input and convergence failures are reported and the loop continues.

    Args:
        input_fn:
            (Default input) Called with a prompt, returns the user's answer

        output:
            (Default sys.stdout) Where the menu and results are written
    """
    input_fn = input_fn or input
    output = output or sys.stdout
    while True:
        print(_MENU, file=output)
        try:
            choice = input_fn('Enter choice (1-3): ').strip()
        except EOFError:
            break

        if choice == '3':
            break

        if choice not in ('1', '2'):
            print('Invalid choice!', file=output)
            continue

        try:
            easting = float(input_fn('Enter Easting (m): '))
            northing = float(input_fn('Enter Northing (m): '))

            if choice == '1':
                zone = int(input_fn('Enter UTM Zone Number (1-60): '))
                is_northern = parse_hemisphere(input_fn('Northern Hemisphere? (Y/N): '))
                result = convert_utm_to_latlon(easting, northing, zone, is_northern)
            else:
                result = convert_bng_to_latlon(easting, northing)

        except EOFError:
            break
        except (ValueError, ConvergenceError) as e:
            print(f'Error: {e}', file=output)
            continue

        print_result(result, output)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gridlatlon',
        description='Convert Easting/Northing grid references to Latitude/Longitude.',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    sub = parser.add_subparsers(dest='command')

    utm = sub.add_parser('utm', help='Convert a UTM (WGS84) grid reference')
    utm.add_argument('easting', type=float)
    utm.add_argument('northing', type=float)
    utm.add_argument('zone', type=int, help='UTM zone number (1-60)')
    utm.add_argument('--south', action='store_true', help='Southern hemisphere')

    bng = sub.add_parser('bng', help='Convert a British National Grid (OSGB36) reference')
    bng.add_argument('easting', type=float)
    bng.add_argument('northing', type=float)

    sub.add_parser('demo', help='Print worked examples')
    sub.add_parser('interactive', help='Run the interactive menu (default)')
    return parser


def main(argv: Optional[List[str]] = None, output: Optional[TextIO] = None) -> int:
    """
    Entry point for the gridlatlon console script.

    Args:
        argv:
            (Default sys.argv[1:]) Command line arguments

        output:
            (Default sys.stdout) Where results and errors are written

    Returns:
        The exit status: 0 on success, 1 if a conversion failed
    """
    output = output or sys.stdout
    args = _build_parser().parse_args(argv)
    set_verbose(args.verbose)

    if args.command in ('utm', 'bng'):
        try:
            if args.command == 'utm':
                result = convert_utm_to_latlon(args.easting, args.northing, args.zone, not args.south)
            else:
                result = convert_bng_to_latlon(args.easting, args.northing)
        except (ValueError, ConvergenceError) as e:
            print(f'Error: {e}', file=output)
            return 1
        print_result(result, output)
    elif args.command == 'demo':
        run_demo(output)
    else:
        print('=== Easting/Northing to Latitude/Longitude Converter ===', file=output)
        run_interactive(output=output)

    return 0
