import logging

from console import Console
from database import Database

logger = logging.getLogger(__name__)


class Session:
    """
    One operator session: the console plus the single long-lived database
    connection. Built at startup and handed to every workflow.
    """

    def __init__(self, db, console, config, export_dir=None):
        self.db = db
        self.console = console
        self.config = config
        self.export_dir = export_dir

    @classmethod
    def open(cls, dbname, port, user, config, console=None, export_dir=None):
        """Connect to the named database; raises DatabaseConnectionError."""
        console = console or Console()
        path = config.database_path(dbname)
        logger.info("Opening database %s (port %s, user %s)", dbname, port, user)
        console.write("Connecting to database...")
        db = Database(path, out=console.stdout)
        console.write("Done")
        return cls(db, console, config, export_dir)

    def close(self):
        self.console.write("Disconnecting from database...")
        self.db.close()
        self.console.write("Done\n\nBye !")
