import logging
import os
import sqlite3
import sys
from contextlib import closing

import pandas as pd

logger = logging.getLogger(__name__)


class StatementError(Exception):
    """The store rejected a statement (constraint, syntax, lost connection)."""

    def __init__(self, message, statement=None):
        super().__init__(message)
        self.statement = statement


class DatabaseConnectionError(Exception):
    """The database session could not be opened."""


TABLES = (
    """
    CREATE TABLE IF NOT EXISTS Customer (
        id INTEGER PRIMARY KEY,
        fname TEXT NOT NULL,
        lname TEXT NOT NULL,
        phone TEXT NOT NULL,
        address TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS Mechanic (
        id INTEGER PRIMARY KEY,
        fname TEXT NOT NULL,
        lname TEXT NOT NULL,
        experience INTEGER NOT NULL CHECK (experience >= 0 AND experience < 100)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS Car (
        vin TEXT PRIMARY KEY,
        make TEXT NOT NULL,
        model TEXT NOT NULL,
        year INTEGER NOT NULL CHECK (year >= 1970)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS Owns (
        ownership_id INTEGER PRIMARY KEY,
        customer_id INTEGER NOT NULL REFERENCES Customer(id),
        car_vin TEXT NOT NULL REFERENCES Car(vin)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS Service_Request (
        rid INTEGER PRIMARY KEY,
        customer_id INTEGER NOT NULL REFERENCES Customer(id),
        car_vin TEXT NOT NULL REFERENCES Car(vin),
        date INTEGER NOT NULL,
        odometer INTEGER NOT NULL CHECK (odometer >= 0),
        complain TEXT
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS Closed_Request (
        wid INTEGER PRIMARY KEY,
        rid INTEGER NOT NULL UNIQUE REFERENCES Service_Request(rid),
        mid INTEGER NOT NULL REFERENCES Mechanic(id),
        date INTEGER NOT NULL,
        comment TEXT,
        bill INTEGER NOT NULL CHECK (bill >= 0)
    );
    """,
)


def _as_text(value):
    # NULL stays None; everything else goes through text
    return None if value is None else str(value)


class Database:
    """
    Statement executor over one long-lived sqlite3 connection.

    Every call opens one cursor and closes it before returning, whatever
    happens. Failures from the driver come out as StatementError; nothing
    is retried.
    """

    def __init__(self, db_file, out=None):
        self.db_file = db_file
        self.out = out if out is not None else sys.stdout
        self.conn = self.create_connection(db_file)
        self._apply_pragmas()
        self.create_tables()

    def create_connection(self, db_file):
        path = db_file if db_file == ":memory:" else os.path.abspath(db_file)
        logger.info("Connecting to: %s", path)
        try:
            return sqlite3.connect(path)
        except sqlite3.Error as e:
            raise DatabaseConnectionError(f"Unable to connect to {path}: {e}") from e

    def _apply_pragmas(self):
        try:
            self.conn.execute("PRAGMA foreign_keys = ON;")
        except sqlite3.Error as e:
            raise DatabaseConnectionError(f"Unable to configure {self.db_file}: {e}") from e

    def create_tables(self):
        try:
            for ddl in TABLES:
                self.conn.execute(ddl)
            self.conn.commit()
        except sqlite3.Error as e:
            raise DatabaseConnectionError(f"Unable to prepare schema in {self.db_file}: {e}") from e
        logger.debug("Schema ready in %s", self.db_file)

    def _run(self, cursor, stmt, params):
        try:
            if params is not None:
                cursor.execute(stmt, params)
            else:
                cursor.execute(stmt)
        except sqlite3.Error as e:
            logger.warning("Statement failed: %s | SQL: %s | Params: %s", e, stmt.strip(), params)
            raise StatementError(str(e), stmt) from e

    # ——— Mutating ———
    def execute(self, stmt, params=None):
        """Run an insert/update/delete and commit it."""
        with closing(self.conn.cursor()) as cur:
            self._run(cur, stmt, params)
            try:
                self.conn.commit()
            except sqlite3.Error as e:
                raise StatementError(str(e), stmt) from e

    # ——— Row-returning ———
    def query_print(self, stmt, params=None):
        """Print the header then one tab-separated line per row; return the row count."""
        with closing(self.conn.cursor()) as cur:
            self._run(cur, stmt, params)
            columns = [d[0] for d in cur.description or []]
            row_count = 0
            for row in cur:
                if row_count == 0:
                    print("\t".join(columns) + "\t", file=self.out)
                values = ("null" if v is None else str(v) for v in row)
                print("\t".join(values) + "\t", file=self.out)
                row_count += 1
            return row_count

    def query_collect(self, stmt, params=None):
        """Return all rows as lists of text values."""
        with closing(self.conn.cursor()) as cur:
            self._run(cur, stmt, params)
            return [[_as_text(v) for v in row] for row in cur]

    def query_count(self, stmt, params=None):
        """Return how many rows the query produces."""
        with closing(self.conn.cursor()) as cur:
            self._run(cur, stmt, params)
            return sum(1 for _ in cur)

    def query_frame(self, stmt, params=None):
        """Return the result as a DataFrame of text values, with column names."""
        with closing(self.conn.cursor()) as cur:
            self._run(cur, stmt, params)
            columns = [d[0] for d in cur.description or []]
            rows = [[_as_text(v) for v in row] for row in cur]
            return pd.DataFrame(rows, columns=columns)

    def close(self):
        try:
            self.conn.close()
        except sqlite3.Error as e:
            logger.warning("Error while closing %s: %s", self.db_file, e)
