import io
import logging
import sys

import pytest

import cat


@pytest.fixture(autouse=True)
def root_logger():
    root = logging.getLogger()
    with_handlers = list(root.handlers)
    with_level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in with_handlers:
            root.removeHandler(handler)
    root.setLevel(with_level)


def test_cat_copies_each_file(tmp_path, capsys) -> None:
    alef = tmp_path / "alef.txt"
    alef.write_text("alef\n", encoding="utf-8")
    bet = tmp_path / "bet.txt"
    bet.write_text("bet\nbet", encoding="utf-8")

    assert cat.main([str(alef), str(bet)]) == 0
    assert capsys.readouterr().out == "alef\nbet\nbet"


def test_cat_numbers_lines_across_files(tmp_path, capsys) -> None:
    alef = tmp_path / "alef.txt"
    alef.write_text("alef\n", encoding="utf-8")
    bet = tmp_path / "bet.txt"
    bet.write_text("bet\n", encoding="utf-8")

    cat.main(["-n", str(alef), str(bet)])

    assert capsys.readouterr().out == "     1\talef\n     2\tbet\n"


def test_cat_shows_ends_and_tabs_of_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("a\tb\nc"))

    cat.main(["-ET"])

    assert capsys.readouterr().out == "a^Ib$\nc"


def test_cat_prints_version(capsys) -> None:
    assert cat.main(["--version"]) == 0

    out = capsys.readouterr().out
    assert out.splitlines()[0] == "cat.py {}, {}".format(cat.VERSION, cat.DATE)
    assert out.splitlines()[1] == "Authors:"
    assert out.endswith("License: {}\n".format(cat.LICENSE))


def test_cat_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cat.main(["--help"])

    assert excinfo.value.code == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[:4] == [
        "Usage: {}".format(cat.USAGE),
        cat.PURPOSE,
        "Example: {}".format(cat.EXAMPLE),
        "Options:",
    ]
    assert any("--show-tabs" in _ for _ in lines[4:])


def test_cat_exits_1_at_missing_file(tmp_path, capsys) -> None:
    alef = tmp_path / "alef.txt"
    alef.write_text("alef\n", encoding="utf-8")
    missing = tmp_path / "missing.txt"

    with pytest.raises(SystemExit) as excinfo:
        cat.main([str(alef), str(missing), str(alef)])

    assert excinfo.value.code == 1

    captured = capsys.readouterr()
    assert captured.out == "alef\n"
    assert captured.err == "cat.py: couldn't open {!r}\n".format(str(missing))
