from __future__ import annotations

import logging
import os
import re
import sys

from typing import IO, TYPE_CHECKING, Iterable, Iterator
from typing import Any
from typing import Literal
from typing import NoReturn

from shortopts import scanning
from shortopts.errors import MissingArgumentError
from shortopts.errors import OptionConflictError
from shortopts.errors import OptionError
from shortopts.errors import ScanError
from shortopts.errors import UnknownOptionError
from shortopts.errors import UsageError
from shortopts.formatters import ListHelpFormatter, TableFormatter

if TYPE_CHECKING:
    from shortopts.formatters import HelpFormatter


logger = logging.getLogger(__name__)


def _repr(self):
    return f"<{self.__class__.__name__} at 0x{id(self):x}: {self}>"


class Option:
    """
    Instance attributes:
      name : string
        the single option character, eg. "f" for "-f"
      takes_argument : bool
        whether the option consumes a value from the command line
      description : string
        help text shown by the formatters
      format : string
        scan format used to read values back (see shortopts.scanning)
      used : bool
        set once the option has been seen on the command line
      values : [string]
        raw argument text, in command-line order
    """

    # Characters that have a meaning of their own in spec strings or on
    # the command line and so can never name an option.
    RESERVED: tuple[str, ...] = ("-", ":")

    name: str
    takes_argument: bool
    description: str | None
    format: str | None
    used: bool
    values: list[str]

    def __init__(
        self,
        name: str,
        takes_argument: bool = False,
        description: str | None = None,
        format: Any = None,
    ) -> None:
        self._check_name(name)
        self.name = name
        self.takes_argument = takes_argument
        self.description = description
        self.set_format(format)
        self.used = False
        self.values = []

    def _check_name(self, name: str) -> None:
        if not isinstance(name, str) or len(name) != 1:
            raise OptionError(
                f"invalid option name {name!r}: must be a single character"
            )
        if name in self.RESERVED or name.isspace():
            raise OptionError(f"invalid option name {name!r}: reserved character")

    def set_format(self, format: Any) -> None:
        try:
            self.format = scanning.resolve_format(format)
        except ValueError as err:
            raise OptionError(str(err), self) from None

    def __str__(self) -> str:
        return f"-{self.name}"

    __repr__ = _repr

    def get_opt_string(self) -> str:
        return str(self)

    # -- Processing methods --------------------------------------------

    def process(self, value: str | None = None) -> None:
        self.used = True
        if value is not None:
            if not self.takes_argument:
                raise ValueError(f"option {self} does not take an argument")
            self.values.append(value)
            logger.debug("option %s: value %r", self, value)


class OptionRegistry:
    """
    The set of recognized options.

    Instance attributes:
      option_list : [Option]
        the registered options, in registration order
      _short_opt : { string : Option }
        maps option characters to the Option instances that implement
        them
      conflict_handler : "resolve" | "error"
        what happens when a name is registered twice: "resolve" drops
        the earlier definition, "error" raises OptionConflictError
    """

    option_class: type[Option] = Option
    arg_marker: str = ":"
    separator: str = " "

    def __init__(self, conflict_handler: Literal["resolve", "error"] = "resolve") -> None:
        self._create_option_mappings()
        self.set_conflict_handler(conflict_handler)

    def _create_option_mappings(self) -> None:
        self.option_list: list[Option] = []
        self._short_opt: dict[str, Option] = {}  # single letter -> Option instance

    def set_conflict_handler(self, handler: Literal["resolve", "error"]) -> None:
        if handler not in ("error", "resolve"):
            raise ValueError(f"invalid conflict_resolution value {handler!r}")
        self.conflict_handler = handler

    def teardown(self) -> None:
        """
        Forget every option along with the values collected for it.
        The registry can be defined and tracked again afterwards.
        """
        for option in self.option_list:
            option.used = False
            option.values.clear()
        self._create_option_mappings()

    # -- Option-adding methods -----------------------------------------

    def _check_conflict(self, option: Option) -> None:
        c_option = self._short_opt.get(option.name)
        if c_option is None:
            return

        if self.conflict_handler == "error":
            raise OptionConflictError("conflicting option name", option)
        logger.debug("option %s redefined, dropping earlier definition", option)
        self.option_list.remove(c_option)
        del self._short_opt[option.name]

    def add_option(self, *args, **kwargs) -> Option:
        """add_option(Option)
        add_option(name, takes_argument=False, description=None, format=None)
        """
        if isinstance(args[0], str):
            option = self.option_class(*args, **kwargs)
        elif len(args) == 1 and not kwargs:
            option = args[0]
            if not isinstance(option, Option):
                raise TypeError(f"not an Option instance: {option!r}")
        else:
            raise TypeError("invalid arguments")

        self._check_conflict(option)

        self.option_list.append(option)
        self._short_opt[option.name] = option
        logger.debug(
            "registered option %s (%s)",
            option,
            "with-arg" if option.takes_argument else "flag",
        )
        return option

    def add_options(self, option_list: Iterable[Option]) -> None:
        for option in option_list:
            self.add_option(option)

    def define(self, spec: str) -> None:
        """
        Register options from a compact spec string such as "hvn:f:".

        Every character becomes an option.  The spec is split into
        groups on ':' and ' ', and the last character of each group
        takes an argument.  Unless the spec itself ends with ':', the
        very last option registered is a plain flag.

        The whole spec is checked before anything is registered, so a
        bad name or a rejected conflict leaves the registry unchanged.
        """
        tokens = re.split(
            f"[{re.escape(self.arg_marker + self.separator)}]+", spec
        )
        options = [
            self.option_class(name, takes_argument=(i == len(token) - 1))
            for token in tokens
            for i, name in enumerate(token)
        ]
        if not options:
            return
        if not spec.endswith(self.arg_marker):
            options[-1].takes_argument = False

        if self.conflict_handler == "error":
            seen = set(self._short_opt)
            for option in options:
                if option.name in seen:
                    raise OptionConflictError("conflicting option name", option)
                seen.add(option.name)

        self.add_options(options)

    def describe(
        self, name: str, format: Any = None, description: str | None = None
    ) -> Option:
        option = self.find(name)
        if option is None:
            raise OptionError("cannot describe an undefined option", name)
        option.set_format(format)
        option.description = description
        return option

    # -- Option query methods ------------------------------------------

    def find(self, name: str) -> Option | None:
        return self._short_opt.get(name)

    get_option = find

    def has_option(self, name: str) -> bool:
        return name in self._short_opt

    __contains__ = has_option

    def __iter__(self) -> Iterator[Option]:
        return iter(self.option_list[:])

    def __len__(self) -> int:
        return len(self.option_list)


class OptionParser(OptionRegistry):
    """
    Class attributes:
      prefix_char : string
        the character introducing an option cluster on the command line

    Instance attributes:
      prog : string
        the name of the current program (to override
        os.path.basename(sys.argv[0])) used in error messages
      formatter : HelpFormatter
        renders the option list for print_help()
      verbose_formatter : HelpFormatter
        renders the option state table for print_verbose()

    A parser is the whole parsing context: build it, define() the
    options, track() the command line once, then query it.  Tracking
    mutates the registered options, so parsers are not thread-safe.
    """

    prefix_char: str = "-"

    def __init__(
        self,
        spec: str | None = None,
        prog: str | None = None,
        conflict_handler: Literal["resolve", "error"] = "resolve",
        formatter: HelpFormatter | None = None,
        verbose_formatter: HelpFormatter | None = None,
    ) -> None:
        super().__init__(conflict_handler)
        self.prog = prog
        if formatter is None:
            formatter = ListHelpFormatter()
        self.formatter = formatter
        self.formatter.set_parser(self)
        if verbose_formatter is None:
            verbose_formatter = TableFormatter()
        self.verbose_formatter = verbose_formatter
        self.verbose_formatter.set_parser(self)

        if spec:
            self.define(spec)

    # -- Option-tracking methods ---------------------------------------

    def _get_args(self, args: Iterable[str] | None) -> list[str]:
        if args is None:
            return sys.argv[1:]
        return list(args)  # don't modify caller's list

    def track(self, args: Iterable[str] | None = None) -> None:
        """
        track(args : [string] = sys.argv[1:])

        Walk the command line once, marking every option seen as used
        and attaching argument values to the options that take them.
        A malformed command line results in a call to 'error()', which
        by default prints the message to stderr and calls sys.exit().
        """
        rargs = self._get_args(args)
        logger.debug("tracking %d argument(s)", len(rargs))

        try:
            self._process_args(rargs)
        except UsageError as err:
            self.error(str(err))

    def _process_args(self, rargs: list[str]) -> None:
        """_process_args(rargs : [string])

        Consume 'rargs' from the left.  Anything that is not an option
        cluster is skipped, so positional arguments are ignored.
        """
        while rargs:
            arg = rargs.pop(0)
            if arg[:1] == self.prefix_char:
                self._process_short_opts(arg, rargs)

    def _process_short_opts(self, arg: str, rargs: list[str]) -> None:
        pending = None
        i = 1
        for ch in arg[1:]:
            option = self._short_opt.get(ch)
            i += 1  # we have consumed a character

            if not option:
                raise UnknownOptionError(self.prefix_char + ch)
            if not option.takes_argument:
                option.process()
                continue

            # Any characters left in arg?  They are the value, and the
            # rest of the cluster is not scanned.
            if i < len(arg):
                option.process(arg[i:])
            else:
                option.process()
                pending = option
            break

        if pending is not None:
            if not rargs:
                raise MissingArgumentError(pending.get_opt_string(), arg)
            pending.process(rargs.pop(0))

    # -- Value query methods -------------------------------------------

    def is_used(self, name: str) -> Option | None:
        option = self.find(name)
        if option is not None and option.used:
            return option
        return None

    def length(self, name: str) -> int:
        option = self.find(name)
        if option is None:
            return 0
        return len(option.values)

    def scan_value(self, name: str, index: int = 0, type: type | None = None) -> Any:
        """
        Read value number 'index' of option 'name' with the option's scan
        format.  Returns None if the option is undefined, unused, a flag,
        has no format, or if the index is out of range or the text does
        not scan.  'type', if given, converts the scanned value.
        """
        option = self.is_used(name)
        if (
            option is None
            or not option.takes_argument
            or not option.format
            or not 0 <= index < len(option.values)
        ):
            return None

        try:
            value = scanning.scan_value(option.format, option.values[index])
        except ScanError as err:
            logger.debug("option %s: %s", option, err)
            return None

        if type is not None and not isinstance(value, type):
            try:
                value = type(value)
            except (TypeError, ValueError):
                return None
        return value

    def for_each(self, name: str, type: type | None = None) -> Iterator[tuple[int, Any]]:
        index = 0
        while True:
            value = self.scan_value(name, index, type)
            if value is None:
                return
            yield index, value
            index += 1

    # -- Feedback methods ----------------------------------------------

    def get_prog_name(self) -> str:
        if self.prog is None:
            return os.path.basename(sys.argv[0])
        return self.prog

    def exit(self, status: int = 0, msg: str | None = None) -> NoReturn:
        if msg:
            sys.stderr.write(msg)
        sys.exit(status)

    def error(self, msg: str) -> NoReturn:
        """error(msg : string)

        Print 'msg' to stderr and exit with status 2.  If you override
        this in a subclass, it should not return -- it should either
        exit or raise an exception.
        """
        self.exit(2, f"{self.get_prog_name()}: error: {msg}\n")

    def format_help(self, formatter: HelpFormatter | None = None) -> str:
        if formatter is None:
            formatter = self.formatter
        return formatter.format_help()

    def print_help(self, file: IO[str] | None = None) -> None:
        """print_help(file : file = stdout)

        Print one line per option, marking the options that take an
        argument with '*', to 'file' (default stdout).
        """
        if file is None:
            file = sys.stdout
        file.write(self.format_help())

    def format_verbose(self) -> str:
        return self.format_help(self.verbose_formatter)

    def print_verbose(self, file: IO[str] | None = None) -> None:
        """print_verbose(file : file = stdout)

        Print a table with the current state of every option: whether
        it was used and which values it collected.
        """
        if file is None:
            file = sys.stdout
        file.write(self.format_verbose())
