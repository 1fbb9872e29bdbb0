import argparse
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from wigner import WignerError, legendre_p_l, wigner_3j_l, wigner_3j_m, wigner_d_l

logger = logging.getLogger("wigner")


def _parser():
    parser = argparse.ArgumentParser(prog="wigner", description="Angular momentum coupling coefficients.")
    parser.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("3j-l", help="3j symbols for all allowed l1")
    for name in ("l2", "l3", "m2", "m3"):
        p.add_argument(name, type=float)

    p = sub.add_parser("3j-m", help="3j symbols for all allowed m2")
    for name in ("l1", "l2", "l3", "m1"):
        p.add_argument(name, type=float)

    p = sub.add_parser("d", help="Wigner small-d elements for l = lmin..lmax")
    for name in ("lmin", "lmax", "m1", "m2"):
        p.add_argument(name, type=int)
    p.add_argument("theta", type=float)

    p = sub.add_parser("legendre", help="Legendre polynomials for l = lmin..lmax")
    p.add_argument("lmin", type=int)
    p.add_argument("lmax", type=int)
    p.add_argument("x", type=float)
    return parser


def _evaluate(args):
    """Return (index label, first index, values)."""
    if args.command == "3j-l":
        lo, _, values = wigner_3j_l(args.l2, args.l3, args.m2, args.m3)
        return "l1", lo, values
    if args.command == "3j-m":
        lo, _, values = wigner_3j_m(args.l1, args.l2, args.l3, args.m1)
        return "m2", lo, values
    if args.command == "d":
        return "l", args.lmin, wigner_d_l(args.lmin, args.lmax, args.m1, args.m2, args.theta)
    return "l", args.lmin, legendre_p_l(args.lmin, args.lmax, args.x)


def main(argv=None):
    args = _parser().parse_args(argv)

    level = "DEBUG" if args.verbose else os.environ.get("WIGNER_LOG_LEVEL", "WARNING").upper()
    unknown = not isinstance(logging.getLevelName(level), int)
    logging.basicConfig(level="WARNING" if unknown else level, format="%(message)s", handlers=[RichHandler()])
    if unknown:
        logger.warning("unknown WIGNER_LOG_LEVEL %r, using WARNING", level)

    console = Console()
    try:
        label, first, values = _evaluate(args)
    except WignerError as e:
        console.print(f"[red]error:[/red] {e}")
        return 2

    table = Table(title=f"wigner {args.command}")
    table.add_column(label, justify="right")
    table.add_column("value", justify="right")
    for i, value in enumerate(values):
        table.add_row(f"{first + i:g}", f"{value: .15e}")
    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
