from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from shortopts.optparser import Option


class OptParseError(Exception):
    def __init__(self, msg: str) -> None:
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


class OptionError(OptParseError):
    """
    Raised if an option is defined, described or looked up with invalid
    or inconsistent arguments.
    """

    def __init__(self, msg: str, option: Option | str | None = None) -> None:
        self.msg = msg
        if option is None:
            self.option_id = ""
        elif isinstance(option, str):
            self.option_id = f"-{option}"
        else:
            self.option_id = str(option)

    def __str__(self) -> str:
        if self.option_id:
            return f"option {self.option_id}: {self.msg}"
        return self.msg


class OptionConflictError(OptionError):
    """
    Raised if an option name is registered twice and the parser
    rejects conflicts.
    """


class UsageError(OptParseError):
    """
    Raised while tracking a malformed command line. The parser turns
    these into an immediate exit.
    """


class UnknownOptionError(UsageError):
    """
    Raised if an undefined option character is seen on the command line.
    """

    def __init__(self, opt_str: str) -> None:
        self.opt_str = opt_str

    def __str__(self) -> str:
        return f"unknown option: {self.opt_str}"


class MissingArgumentError(UsageError):
    """
    Raised if an option requiring an argument ends the command line.
    """

    def __init__(self, opt_str: str, arg: str) -> None:
        self.opt_str = opt_str
        self.arg = arg

    def __str__(self) -> str:
        return f"{self.opt_str} option requires an argument (in {self.arg!r})"


class ScanError(OptParseError):
    """
    Raised if a raw value cannot be read with a scan format.
    """

    def __init__(self, fmt: str, value: str, reason: str) -> None:
        self.fmt = fmt
        self.value = value
        self.msg = f"cannot scan {value!r} with {fmt!r}: {reason}"
