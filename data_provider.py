"""
Data Provider
Wires backend capabilities, install scripts and the schema initializer
together for one database engine
"""

import logging

from bootstrap_errors import ConfigurationError
from capability_provider import CapabilityProvider
from schema_initializer import PrepareOnce, SchemaInitializer
from schema_store import ScriptSchemaStore, SqlAlchemySchemaStore
from script_loader import (
    ROLE_INDEXES,
    ROLE_STORED_PROCEDURES,
    ScriptFile,
    ScriptLoader,
    ScriptLocator,
)

logger = logging.getLogger(__name__)


class DataProvider:
    """Database provider for one SQLAlchemy engine"""

    def __init__(self, engine, required_tables, metadata=None, schema_script=None,
                 locator=None, script_files=None, schema=None, loader=None):
        """
        Initialize data provider

        Args:
            engine: SQLAlchemy Engine
            required_tables: Tables that must exist for the schema to be present
            metadata: Model MetaData used to create the schema
            schema_script: Script that creates the schema when there is no model
            locator: ScriptLocator for the app data folder (default: cwd)
            script_files: Explicit custom script list; None uses the
                backend's well-known index and stored procedure scripts
            schema: Database schema holding the required tables
            loader: ScriptLoader shared by the store and the initializer
        """
        if metadata is None and schema_script is None:
            raise ConfigurationError("Either a model or a schema script is required")

        self.engine = engine
        self.required_tables = tuple(required_tables)
        self.locator = locator or ScriptLocator('.')
        self.loader = loader or ScriptLoader()
        self._script_files = script_files

        if metadata is not None:
            self.store = SqlAlchemySchemaStore(engine, metadata, schema=schema)
        else:
            self.store = ScriptSchemaStore(
                engine, self.locator.resolve(schema_script), schema=schema, loader=self.loader
            )

        self._capabilities = None
        self._initializer = None
        self._prepare_once = None

    @property
    def capabilities(self):
        if self._capabilities is None:
            self._capabilities = CapabilityProvider.for_engine(self.engine)
        return self._capabilities

    def script_files(self):
        """
        Custom command scripts in execution order

        Indexes come first so stored procedures can rely on them. The stored
        procedure script is skipped for backends without stored procedures.
        """
        if self._script_files is not None:
            return list(self._script_files)

        prefix = self.capabilities.script_prefix
        files = [ScriptFile(ROLE_INDEXES, self.locator.well_known(ROLE_INDEXES, prefix))]
        if self.capabilities.supports_stored_procedures:
            files.append(ScriptFile(
                ROLE_STORED_PROCEDURES, self.locator.well_known(ROLE_STORED_PROCEDURES, prefix)
            ))
        return files

    def build_initializer(self):
        return SchemaInitializer(
            self.required_tables,
            self.store,
            script_files=self.script_files(),
            loader=self.loader,
        )

    @property
    def initializer(self):
        """SchemaInitializer used by init_database(), built on first use"""
        if self._initializer is None:
            self._initializer = self.build_initializer()
        return self._initializer

    def init_database(self):
        """
        Prepare the database once for this provider

        Returns:
            InitializationState: SCHEMA_PRESENT or CUSTOM_COMMANDS_APPLIED

        Raises:
            BootstrapError: The error of the first attempt, raised again on
                every later call
        """
        if self._prepare_once is None:
            self._prepare_once = PrepareOnce(self.initializer)
        return self._prepare_once()
