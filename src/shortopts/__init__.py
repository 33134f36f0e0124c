from __future__ import annotations

from shortopts.errors import MissingArgumentError
from shortopts.errors import OptionConflictError
from shortopts.errors import OptionError
from shortopts.errors import OptParseError
from shortopts.errors import ScanError
from shortopts.errors import UnknownOptionError
from shortopts.errors import UsageError
from shortopts.optparser import Option
from shortopts.optparser import OptionParser
from shortopts.optparser import OptionRegistry


__all__ = [
    "MissingArgumentError",
    "OptParseError",
    "Option",
    "OptionConflictError",
    "OptionError",
    "OptionParser",
    "OptionRegistry",
    "ScanError",
    "UnknownOptionError",
    "UsageError",
]
