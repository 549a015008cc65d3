"""
Connection resolution for target databases.

Clients describe a database by a type and a connection string. The string is
either a SQLAlchemy URL, used unchanged, or an ADO-style ``Key=Value;`` list
such as ``Server=db;Database=sales;User Id=app;Password=secret``, which is
translated to the URL of the SQLAlchemy dialect serving that type.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from sqlalchemy.engine import URL, make_url

from dbchat_ai.core.logging_config import get_logger

logger = get_logger(__name__)


class UnsupportedDatabaseTypeError(ValueError):
    """The requested database type has no dialect mapping."""

    def __init__(self, database_type: str) -> None:
        super().__init__(f"Unsupported database type: {database_type}")
        self.database_type = database_type


class DatabaseType(str, Enum):
    """Supported target database types."""

    MSSQL = "MSSQL"
    MYSQL = "MYSQL"
    POSTGRESQL = "POSTGRESQL"
    ORACLE = "ORACLE"
    SQLITE = "SQLITE"

    @classmethod
    def parse(cls, name: str) -> "DatabaseType":
        normalized = (name or "").strip().upper()
        if normalized == "SQLSERVER":
            return cls.MSSQL
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedDatabaseTypeError(name) from None


def supported_types() -> List[str]:
    """Get the names of every supported database type."""
    return [database_type.value for database_type in DatabaseType]


# SQLAlchemy driver per database type
DRIVERS: Dict[DatabaseType, str] = {
    DatabaseType.MSSQL: "mssql+pyodbc",
    DatabaseType.MYSQL: "mysql+pymysql",
    DatabaseType.POSTGRESQL: "postgresql+psycopg",
    DatabaseType.ORACLE: "oracle+oracledb",
    DatabaseType.SQLITE: "sqlite",
}

DEFAULT_ODBC_DRIVER = "ODBC Driver 18 for SQL Server"

# Accepted spellings of each ADO key, lower-cased
_KEY_ALIASES: Dict[str, str] = {
    "server": "host",
    "host": "host",
    "data source": "host",
    "datasource": "host",
    "address": "host",
    "port": "port",
    "database": "database",
    "initial catalog": "database",
    "user id": "username",
    "userid": "username",
    "uid": "username",
    "user": "username",
    "username": "username",
    "password": "password",
    "pwd": "password",
}


def parse_key_value_string(connection_string: str) -> Dict[str, str]:
    """Split ``Key=Value;`` pairs. Keys are lower-cased, empty segments skipped.

    Args:
        connection_string: ADO-style connection string

    Returns:
        Mapping of lower-cased keys to values
    """
    pairs: Dict[str, str] = {}
    for segment in connection_string.split(";"):
        if "=" not in segment:
            continue
        key, _, value = segment.partition("=")
        key = key.strip().lower()
        if key:
            pairs[key] = value.strip()
    return pairs


def _normalized_parts(pairs: Dict[str, str]) -> Dict[str, str]:
    parts: Dict[str, str] = {}
    for key, value in pairs.items():
        canonical = _KEY_ALIASES.get(key)
        if canonical and canonical not in parts:
            parts[canonical] = value
    # "Server=host,1433" carries the SQL Server port after a comma
    host = parts.get("host", "")
    if "," in host and "port" not in parts:
        host, _, port = host.partition(",")
        parts["host"] = host.strip()
        parts["port"] = port.strip()
    return parts


def is_sqlalchemy_url(connection_string: str) -> bool:
    return "://" in connection_string.split(";", 1)[0]


_ODBC_KEYS = {"host": "SERVER", "database": "DATABASE", "username": "UID", "password": "PWD"}


def _odbc_connect_string(pairs: Dict[str, str]) -> str:
    parts = _normalized_parts(pairs)
    driver = pairs.get("driver") or f"{{{DEFAULT_ODBC_DRIVER}}}"
    segments = [f"DRIVER={driver}"]
    for canonical, odbc_key in _ODBC_KEYS.items():
        value = parts.get(canonical)
        if not value:
            continue
        if canonical == "host" and parts.get("port"):
            value = f"{value},{parts['port']}"
        segments.append(f"{odbc_key}={value}")
    # Options such as Encrypt or TrustServerCertificate pass through unchanged
    for key, value in pairs.items():
        if key != "driver" and key not in _KEY_ALIASES:
            segments.append(f"{key}={value}")
    return ";".join(segments)


def build_connection_url(database_type: str, connection_string: str) -> URL:
    """Resolve a type and connection string into a SQLAlchemy URL.

    Args:
        database_type: MSSQL, MYSQL, POSTGRESQL, ORACLE or SQLITE
        connection_string: SQLAlchemy URL or ADO-style ``Key=Value;`` string

    Returns:
        SQLAlchemy URL for a synchronous engine

    Raises:
        UnsupportedDatabaseTypeError: If the type has no dialect mapping
        ValueError: If the connection string is empty
    """
    db_type = DatabaseType.parse(database_type)
    if not connection_string or not connection_string.strip():
        raise ValueError("Connection string is empty")

    connection_string = connection_string.strip()
    if is_sqlalchemy_url(connection_string):
        return make_url(connection_string)

    pairs = parse_key_value_string(connection_string)
    driver = DRIVERS[db_type]

    if db_type is DatabaseType.MSSQL:
        return URL.create(driver, query={"odbc_connect": _odbc_connect_string(pairs)})

    parts = _normalized_parts(pairs)
    if db_type is DatabaseType.SQLITE:
        return URL.create(driver, database=parts.get("host") or parts.get("database"))

    port: Optional[int] = int(parts["port"]) if parts.get("port") else None
    if db_type is DatabaseType.ORACLE:
        # Oracle addresses a service name rather than a database
        return URL.create(
            driver,
            username=parts.get("username"),
            password=parts.get("password"),
            host=parts.get("host"),
            port=port,
            query={"service_name": parts["database"]} if parts.get("database") else {},
        )

    return URL.create(
        driver,
        username=parts.get("username"),
        password=parts.get("password"),
        host=parts.get("host"),
        port=port,
        database=parts.get("database"),
    )
