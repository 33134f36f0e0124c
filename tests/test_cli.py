## shortopts: demo program tests

import pytest

from shortopts.__main__ import main


def test_cli_prints_parsed_results(capsys):
    assert main(["-vn", "42", "-fdata.txt", "-b1", "-d2.5"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "=== Parsing Results ===",
        "Verbose mode: ON",
        "Number[0]: 42",
        "Filename: data.txt",
        "Boolean flag: true",
        "Double value: 2.50",
    ]


def test_cli_separated_values_and_repeats(capsys):
    assert main(["-v", "-n", "1", "-n", "2", "-f", "data.txt", "-b", "no"]) == 0
    out = capsys.readouterr().out
    assert "Number[0]: 1\nNumber[1]: 2\n" in out
    assert "Filename: data.txt" in out
    assert "Boolean flag: false" in out
    assert "Double value" not in out


def test_cli_help(capsys):
    assert main(["-h", "-n", "3"]) == 0
    out = capsys.readouterr().out
    assert "  -h    Show help\n" in out
    assert "* -n    Number (int)\n" in out
    assert "Parsing Results" not in out


def test_cli_verbose_table(capsys):
    assert main(["-V", "-n", "1", "-n", "2"]) == 0
    out = capsys.readouterr().out
    assert "1,2" in out
    assert "with-arg" in out


def test_cli_unknown_option(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["-x"])
    assert exc.value.code == 2
    assert capsys.readouterr().err == "shortopts: error: unknown option: -x\n"


def test_cli_missing_argument(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["-v", "-f"])
    assert exc.value.code == 2
    assert "-f option requires an argument" in capsys.readouterr().err
