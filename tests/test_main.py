import sqlite3

import pytest

import main as shop_main
from conftest import output_lines


@pytest.fixture(autouse=True)
def shop_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MECHANIC_SHOP_DB_DIR", str(tmp_path))
    monkeypatch.delenv("MECHANIC_SHOP_LOG_FILE", raising=False)
    return tmp_path


def test_wrong_argument_count_prints_usage_without_connecting(monkeypatch, capsys):
    class NoSession:
        @classmethod
        def open(cls, *args, **kwargs):
            raise AssertionError("no connection expected")

    monkeypatch.setattr(shop_main, "Session", NoSession)

    with pytest.raises(SystemExit) as exc:
        shop_main.main(["shop"])

    assert exc.value.code != 0
    assert "usage:" in capsys.readouterr().err


def test_connection_failure_exits_non_zero(monkeypatch, tmp_path, make_console, capsys):
    monkeypatch.setenv("MECHANIC_SHOP_DB_DIR", str(tmp_path / "missing"))
    status = shop_main.main(["shop", "5432", "frontdesk"], console=make_console())
    assert status == 1
    assert "Unable to Connect to Database" in capsys.readouterr().err


def test_unknown_choice_rerenders_menu(make_console, shop_env):
    console = make_console("99", "11")
    assert shop_main.main(["shop", "5432", "frontdesk"], console=console) == 0

    lines = output_lines(console)
    assert lines.count("MAIN MENU") == 2
    assert "Bye !" in lines
    assert (shop_env / "shop.db").exists()


def test_non_numeric_choice_is_reprompted(make_console):
    console = make_console("abc", "11")
    assert shop_main.main(["shop", "5432", "frontdesk"], console=console) == 0

    lines = output_lines(console)
    assert lines.count("MAIN MENU") == 1
    assert lines.count("Please make your choice: ") == 2


def test_duplicate_car_returns_to_menu(make_console, shop_env):
    car = ("VIN1", "Ford", "Model T", "1990")
    console = make_console("3", *car, "3", *car, "11")

    assert shop_main.main(["shop", "5432", "frontdesk"], console=console) == 0

    lines = output_lines(console)
    assert lines.count("MAIN MENU") == 3
    assert sum(line.startswith("Query failed:") for line in lines) == 1
    with sqlite3.connect(shop_env / "shop.db") as conn:
        assert conn.execute("SELECT COUNT(*) FROM Car").fetchone() == (1,)


def test_closed_input_ends_session_without_partial_rows(make_console, shop_env):
    console = make_console("1", "Jane", "12")
    assert shop_main.main(["shop", "5432", "frontdesk"], console=console) == 0

    assert "Bye !" in output_lines(console)
    with sqlite3.connect(shop_env / "shop.db") as conn:
        assert conn.execute("SELECT COUNT(*) FROM Customer").fetchone() == (0,)


def test_invalid_labor_rate_exits_non_zero(monkeypatch, make_console, capsys):
    monkeypatch.setenv("MECHANIC_SHOP_LABOR_RATE", "lots")
    assert shop_main.main(["shop", "5432", "frontdesk"], console=make_console()) == 1
    assert "Invalid configuration" in capsys.readouterr().err
