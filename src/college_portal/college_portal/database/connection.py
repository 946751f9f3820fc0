from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    user: str
    password: str
    database: str
    port: int = 3306


class DatabaseConnection:
    """Opens a fresh MySQL connection for each repository call.

    One factory is shared per process; `db_cursor` closes what it opens.
    """

    _shared: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._shared is None:
            cls._shared = cls(config)
        return cls._shared

    def connect(self):
        return mysql.connector.connect(**asdict(self.config))
