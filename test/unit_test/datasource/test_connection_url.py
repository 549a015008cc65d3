"""Unit tests for resolving target database connection strings to SQLAlchemy URLs."""

import pytest

from dbchat_ai.datasource.connection import (
    DEFAULT_ODBC_DRIVER,
    DatabaseType,
    UnsupportedDatabaseTypeError,
    build_connection_url,
    is_sqlalchemy_url,
    parse_key_value_string,
    supported_types,
)


class TestDatabaseType:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("MSSQL", DatabaseType.MSSQL),
            ("mssql", DatabaseType.MSSQL),
            ("SqlServer", DatabaseType.MSSQL),
            (" postgresql ", DatabaseType.POSTGRESQL),
            ("MySql", DatabaseType.MYSQL),
            ("oracle", DatabaseType.ORACLE),
            ("sqlite", DatabaseType.SQLITE),
        ],
    )
    def test_parse(self, name, expected):
        assert DatabaseType.parse(name) is expected

    @pytest.mark.parametrize("name", ["", "mongodb", None])
    def test_parse_unsupported(self, name):
        with pytest.raises(UnsupportedDatabaseTypeError) as exc_info:
            DatabaseType.parse(name)
        assert "Unsupported database type" in str(exc_info.value)

    def test_supported_types(self):
        assert supported_types() == ["MSSQL", "MYSQL", "POSTGRESQL", "ORACLE", "SQLITE"]


class TestKeyValueParsing:
    def test_parse_key_value_string(self):
        pairs = parse_key_value_string("Server=db; Database = sales;;User Id=app;Password=p=w;")
        assert pairs == {"server": "db", "database": "sales", "user id": "app", "password": "p=w"}

    def test_is_sqlalchemy_url(self):
        assert is_sqlalchemy_url("postgresql://app@db/sales") is True
        assert is_sqlalchemy_url("Server=db;Database=sales") is False


class TestBuildConnectionUrl:
    def test_sqlalchemy_url_is_used_unchanged(self):
        url = build_connection_url("POSTGRESQL", "postgresql+psycopg://app:secret@db:5432/sales")
        assert url.drivername == "postgresql+psycopg"
        assert url.host == "db"
        assert url.database == "sales"

    def test_postgresql_key_value(self):
        url = build_connection_url("POSTGRESQL", "Host=db;Port=5432;Database=sales;Username=app;Password=secret")
        assert url.drivername == "postgresql+psycopg"
        assert url.host == "db"
        assert url.port == 5432
        assert url.database == "sales"
        assert url.username == "app"
        assert url.password == "secret"

    def test_mysql_key_value(self):
        url = build_connection_url("MYSQL", "Server=mysql.local;Database=shop;Uid=root;Pwd=pw")
        assert url.drivername == "mysql+pymysql"
        assert url.host == "mysql.local"
        assert url.port is None
        assert url.database == "shop"
        assert url.username == "root"

    def test_mssql_builds_odbc_connect(self):
        url = build_connection_url(
            "MSSQL", "Server=sql.local,1433;Initial Catalog=sales;User Id=sa;Password=pw;Encrypt=yes"
        )
        assert url.drivername == "mssql+pyodbc"
        odbc = url.query["odbc_connect"]
        assert odbc.startswith(f"DRIVER={{{DEFAULT_ODBC_DRIVER}}}")
        assert "SERVER=sql.local,1433" in odbc
        assert "DATABASE=sales" in odbc
        assert "UID=sa" in odbc
        assert "PWD=pw" in odbc
        assert "encrypt=yes" in odbc

    def test_mssql_explicit_driver(self):
        url = build_connection_url("SQLSERVER", "Driver={ODBC Driver 17 for SQL Server};Server=sql.local")
        assert url.query["odbc_connect"].startswith("DRIVER={ODBC Driver 17 for SQL Server}")

    def test_oracle_uses_service_name(self):
        url = build_connection_url("ORACLE", "Host=ora;Port=1521;Database=ORCLPDB1;User Id=scott;Password=tiger")
        assert url.drivername == "oracle+oracledb"
        assert url.query["service_name"] == "ORCLPDB1"
        assert url.database is None

    def test_sqlite_data_source(self, tmp_path):
        path = str(tmp_path / "chinook.db")
        url = build_connection_url("SQLITE", f"Data Source={path}")
        assert url.drivername == "sqlite"
        assert url.database == path

    @pytest.mark.parametrize("connection_string", ["", "   ", None])
    def test_empty_connection_string(self, connection_string):
        with pytest.raises(ValueError, match="Connection string is empty"):
            build_connection_url("POSTGRESQL", connection_string)

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedDatabaseTypeError):
            build_connection_url("DB2", "Server=x")
