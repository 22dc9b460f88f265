"""
Schema Store
SQLAlchemy implementations of the table-existence check, schema
creation and statement execution used by the schema initializer
"""

import logging

import sqlalchemy as sa

from script_loader import ScriptLoader

logger = logging.getLogger(__name__)


class SqlAlchemySchemaStore:
    """Creates the schema from a registered SQLAlchemy model"""

    def __init__(self, engine, metadata=None, schema=None):
        """
        Args:
            engine: SQLAlchemy Engine of the target database
            metadata: MetaData (or declarative base) describing the model
            schema: Database schema that holds the required tables
        """
        self.engine = engine
        self.metadata = getattr(metadata, 'metadata', metadata)
        self.schema = schema

    def table_exists(self, table_name):
        return sa.inspect(self.engine).has_table(table_name, schema=self.schema)

    def create_schema(self):
        if self.metadata is None:
            raise RuntimeError("No model metadata registered for schema creation")
        logger.info("Creating %d table(s) from model", len(self.metadata.tables))
        self.metadata.create_all(self.engine)

    def execute(self, statement):
        """
        Run one raw statement in its own transaction.

        exec_driver_sql() passes the text to the DBAPI untouched, so
        procedure bodies with colons or semicolons are not reinterpreted.
        """
        with self.engine.begin() as conn:
            conn.exec_driver_sql(statement)


class ScriptSchemaStore(SqlAlchemySchemaStore):
    """Creates the schema by running a mandatory SQL script"""

    def __init__(self, engine, schema_script, schema=None, loader=None):
        super().__init__(engine, schema=schema)
        self.schema_script = schema_script
        self.loader = loader or ScriptLoader()

    def create_schema(self):
        statements = self.loader.load(self.schema_script, require_exists=True)
        logger.info("Creating schema from %s (%d statement(s))", self.schema_script, len(statements))
        with self.engine.begin() as conn:
            for statement in statements:
                conn.exec_driver_sql(statement)
