"""
LinSolver — Entry point.

Solve a system from the command line, or serve the HTTP API::

    python main.py "2x + y = 5" "x - y = 1" --steps
    python main.py --serve --port 8000
"""

import argparse
import logging
import sys

from solver import GAUSSIAN_ELIMINATION, METHODS, solve


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve a system of linear equations.")
    parser.add_argument("equations", nargs="*",
                        help='equations such as "2x + y = 5" (or one comma-separated string)')
    parser.add_argument("--method", choices=METHODS, default=GAUSSIAN_ELIMINATION)
    parser.add_argument("--steps", action="store_true",
                        help="print every row operation")
    parser.add_argument("--serve", action="store_true", help="run the HTTP API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _serve(host: str, port: int) -> None:
    import uvicorn

    uvicorn.run("backend.app.main:app", host=host, port=port)


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.serve:
        _serve(args.host, args.port)
        return 0
    if not args.equations:
        parser.error("give at least one equation, or --serve")

    equations = args.equations[0] if len(args.equations) == 1 else args.equations
    result = solve(equations, args.method, steps=args.steps)

    if result.steps:
        for line in result.steps:
            print(line.rstrip("\n"))
        print()
    print(f"Status: {result.status.value}")
    if result.variables:
        for name, value in result.variables.items():
            print(f"  {name} = {value}")
    if result.message:
        print(result.message)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
