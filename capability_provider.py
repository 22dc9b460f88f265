"""
Capability Provider
Describes what each supported database backend can do
"""

from dataclasses import dataclass

from sqlalchemy import bindparam
from sqlalchemy.engine import make_url

from bootstrap_errors import UnsupportedBackendError


@dataclass(frozen=True)
class CapabilityDescriptor:
    """Fixed feature flags and limits of one database backend"""
    name: str
    script_prefix: str
    supports_stored_procedures: bool
    supports_backup: bool
    # 0 means the backend has no usable binary hashing function
    max_hashed_binary_length: int

    @property
    def supports_hashing(self):
        return self.max_hashed_binary_length > 0

    def new_parameter(self, name=None, value=None, type_=None):
        """
        Create a bound parameter for stored procedure calls

        Name and type are not validated; callers own that.

        Args:
            name: Parameter name (anonymous when None)
            value: Initial value
            type_: SQLAlchemy type

        Returns:
            sqlalchemy.sql.elements.BindParameter
        """
        return bindparam(name, value, type_=type_)


# HASHBYTES on SQL Server 2008 and above is limited to 8000 bytes of input
SQL_SERVER = CapabilityDescriptor(
    name='mssql',
    script_prefix='SqlServer',
    supports_stored_procedures=True,
    supports_backup=True,
    max_hashed_binary_length=8000,
)

POSTGRESQL = CapabilityDescriptor(
    name='postgresql',
    script_prefix='PostgreSql',
    supports_stored_procedures=True,
    supports_backup=False,
    max_hashed_binary_length=0,
)

MYSQL = CapabilityDescriptor(
    name='mysql',
    script_prefix='MySql',
    supports_stored_procedures=True,
    supports_backup=False,
    max_hashed_binary_length=0,
)

SQLITE = CapabilityDescriptor(
    name='sqlite',
    script_prefix='SQLite',
    supports_stored_procedures=False,
    supports_backup=False,
    max_hashed_binary_length=0,
)


class CapabilityProvider:
    """Selects the capability descriptor for a backend"""

    DESCRIPTORS = {d.name: d for d in (SQL_SERVER, POSTGRESQL, MYSQL, SQLITE)}

    # MariaDB shares the MySQL descriptor
    ALIASES = {'mariadb': 'mysql'}

    @staticmethod
    def for_dialect(dialect_name):
        """
        Look up the descriptor for a SQLAlchemy dialect name

        Args:
            dialect_name: e.g. "mssql", "postgresql", "sqlite"

        Returns:
            CapabilityDescriptor

        Raises:
            UnsupportedBackendError: If the dialect is not supported
        """
        key = (dialect_name or '').lower()
        key = CapabilityProvider.ALIASES.get(key, key)
        try:
            return CapabilityProvider.DESCRIPTORS[key]
        except KeyError:
            raise UnsupportedBackendError(dialect_name) from None

    @staticmethod
    def for_engine(engine):
        """Look up the descriptor for a SQLAlchemy engine or connection"""
        return CapabilityProvider.for_dialect(engine.dialect.name)

    @staticmethod
    def for_url(url):
        """Look up the descriptor for a database URL without connecting"""
        return CapabilityProvider.for_dialect(make_url(url).get_backend_name())
