from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shortopts.optparser import OptionParser, Option


def _truncate(text: str, width: int) -> str:
    if len(text) > width:
        return text[:width - 3] + "..."
    return text


class HelpFormatter:
    """
    Abstract base class for rendering a parser's options.  OptionParser
    instances use one HelpFormatter for print_help() (by default
    ListHelpFormatter) and another for print_verbose() (by default
    TableFormatter).

    Instance attributes:
      parser : OptionParser
        the controlling OptionParser instance
    """

    def __init__(self) -> None:
        self.parser: OptionParser | None = None

    def set_parser(self, parser: OptionParser) -> None:
        self.parser = parser

    @abstractmethod
    def format_heading(self) -> str:
        raise NotImplementedError("subclasses must implement")

    @abstractmethod
    def format_option(self, option: Option) -> str:
        raise NotImplementedError("subclasses must implement")

    def format_help(self) -> str:
        result = [self.format_heading()]
        for option in self.parser:
            result.append(self.format_option(option))
        return "".join(result)


class ListHelpFormatter(HelpFormatter):
    """One line per option; '*' marks options that take an argument."""

    def __init__(self, arg_mark: str = "*", gap: int = 4) -> None:
        super().__init__()
        self.arg_mark = arg_mark
        self.gap = gap

    def format_heading(self) -> str:
        return ""

    def format_option(self, option: Option) -> str:
        mark = self.arg_mark if option.takes_argument else " "
        return "{} {}{}{}\n".format(
            mark, option, " " * self.gap, option.description or ""
        )


class TableFormatter(HelpFormatter):
    """Format the state of every option as a table."""

    COLUMNS: tuple[str, ...] = ("Option", "Description", "Used", "Type", "Argument")

    def __init__(self, desc_width: int = 20, arg_width: int = 10) -> None:
        super().__init__()
        self.desc_width = desc_width
        self.arg_width = arg_width

    def _format_row(self, cells: tuple[str, ...]) -> str:
        return "%-6s  %-*s  %-6s  %-10s  %-*s" % (
            cells[0],
            self.desc_width,
            cells[1],
            cells[2],
            cells[3],
            self.arg_width,
            cells[4],
        )

    def format_heading(self) -> str:
        rule = tuple("-" * len(column) for column in self.COLUMNS)
        return "\n{}\n{}\n".format(
            self._format_row(self.COLUMNS), self._format_row(rule)
        )

    def format_option(self, option: Option) -> str:
        description = _truncate(option.description or "", self.desc_width)
        values = ",".join(_truncate(value, self.arg_width) for value in option.values)
        return "%-6s  %-*s  %-6s  %-10s  %s\n" % (
            option,
            self.desc_width,
            description,
            "yes" if option.used else "no",
            "with-arg" if option.takes_argument else "flag",
            values,
        )
