from __future__ import annotations

import sys

from typing import Sequence

from shortopts.optparser import OptionParser


def build_parser() -> OptionParser:
    parser = OptionParser("hVvn:f:b:d:", prog="shortopts")

    parser.describe("h", None, "Show help")
    parser.describe("V", None, "Print the state of every option")
    parser.describe("v", None, "Verbose mode")
    parser.describe("n", "%d", "Number (int)")
    parser.describe("f", "%s", "Filename (string)")
    parser.describe("b", "%b", "Boolean flag")
    parser.describe("d", "%lf", "Double value")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    # ./shortopts -v -n 42 -f data.txt -b true -d 3.14
    # ./shortopts -vn 42 -fdata.txt -b1 -d2.5
    parser = build_parser()
    parser.track(argv)

    if parser.is_used("h"):
        parser.print_help()
        return 0

    print("=== Parsing Results ===")

    if parser.is_used("v"):
        print("Verbose mode: ON")

    for i, number in parser.for_each("n"):
        print(f"Number[{i}]: {number}")

    filename = parser.scan_value("f")
    if filename is not None:
        print(f"Filename: {filename}")

    flag = parser.scan_value("b")
    if flag is not None:
        print("Boolean flag:", ("true" if flag else "false"))

    value = parser.scan_value("d", type=float)
    if value is not None:
        print(f"Double value: {value:.2f}")

    if parser.is_used("V"):
        parser.print_verbose()

    return 0


if __name__ == "__main__":
    sys.exit(main())
