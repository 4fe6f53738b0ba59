import io

import pytest

from config import ShopConfig
from console import Console
from database import Database
from startup import Session


@pytest.fixture
def make_console():
    """Build a console that reads the given lines and writes to a buffer."""
    def factory(*lines):
        stdin = io.StringIO("".join(f"{line}\n" for line in lines))
        return Console(stdin=stdin, stdout=io.StringIO())
    return factory


@pytest.fixture
def config(tmp_path):
    return ShopConfig(db_dir=str(tmp_path), log_level="WARNING", log_file=None, labor_rate=50)


@pytest.fixture
def db():
    database = Database(":memory:", out=io.StringIO())
    yield database
    database.close()


@pytest.fixture
def make_session(db, config, make_console):
    def factory(*lines, export_dir=None):
        console = make_console(*lines)
        db.out = console.stdout
        return Session(db, console, config, export_dir)
    return factory


def output_lines(console):
    return console.stdout.getvalue().splitlines()
