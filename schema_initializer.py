"""
Schema Initializer
Creates the database schema once if it is missing, then applies
custom commands (indexes, stored procedures) from SQL scripts.
"""

import enum
import logging
import threading
from datetime import datetime
from typing import Protocol

from bootstrap_errors import BootstrapError, ConfigurationError, ExecutionError, ScriptReadError
from script_loader import ScriptLoader

logger = logging.getLogger(__name__)


class InitializationState(enum.Enum):
    UNKNOWN = "unknown"
    SCHEMA_PRESENT = "schema_present"
    SCHEMA_MISSING = "schema_missing"
    SCHEMA_CREATED = "schema_created"
    CUSTOM_COMMANDS_APPLIED = "custom_commands_applied"
    FAILED = "failed"


class SchemaStore(Protocol):  # pragma: no cover - structural typing helper
    def table_exists(self, table_name) -> bool: ...
    def create_schema(self) -> None: ...
    def execute(self, statement) -> None: ...


class SchemaInitializer:
    """Check-then-create initializer for one target database"""

    def __init__(self, required_tables, store, script_files=(), loader=None):
        """
        Initialize schema initializer

        Args:
            required_tables: Table names that must all exist for the
                schema to count as present
            store: SchemaStore (table_exists, create_schema, execute)
            script_files: ScriptFile sequence applied after schema creation,
                in the given order
            loader: ScriptLoader used to read script_files
        """
        self.required_tables = tuple(required_tables)
        if not self.required_tables:
            raise ConfigurationError("At least one required table must be configured")

        self.store = store
        self.script_files = tuple(script_files)
        self.loader = loader or ScriptLoader()

        self.state = InitializationState.UNKNOWN
        self.results = []

    def prepare(self):
        """
        Make sure the schema exists.

        Does nothing when every required table is present. Otherwise creates
        the schema and runs all custom commands in order, stopping at the
        first failure.

        Returns:
            InitializationState: SCHEMA_PRESENT or CUSTOM_COMMANDS_APPLIED

        Raises:
            ExecutionError: If schema creation or a custom command fails
            ConfigurationError: If a mandatory script file is missing
            ScriptReadError: If a script cannot be read or decoded
        """
        self.state = InitializationState.UNKNOWN
        self.results = []

        missing = self.missing_tables()
        if not missing:
            self._transition(InitializationState.SCHEMA_PRESENT)
            return self.state

        logger.info("Missing required table(s): %s", ", ".join(missing))
        self._transition(InitializationState.SCHEMA_MISSING)

        self._create_schema()
        self._transition(InitializationState.SCHEMA_CREATED)

        commands = self._load_commands()

        logger.info("Applying %d custom command(s)", len(commands))
        for position, statement in enumerate(commands):
            self._execute(position, statement)

        self._transition(InitializationState.CUSTOM_COMMANDS_APPLIED)
        return self.state

    def missing_tables(self):
        """Return the required tables the store reports as absent"""
        return [name for name in self.required_tables if not self.store.table_exists(name)]

    def _create_schema(self):
        start_time = datetime.now()
        try:
            self.store.create_schema()
        except BootstrapError as e:
            self._record_failure('create_schema', None, start_time, e)
            self._transition(InitializationState.FAILED)
            raise
        except Exception as e:
            self._record_failure('create_schema', None, start_time, e)
            self._transition(InitializationState.FAILED)
            raise ExecutionError(f"Schema creation failed: {e}") from e
        self._record_success('create_schema', None, start_time)

    def _load_commands(self):
        start_time = datetime.now()
        try:
            return self.loader.load_all(self.script_files)
        except BootstrapError as e:
            self._record_failure('load_scripts', None, start_time, e)
            self._transition(InitializationState.FAILED)
            raise
        except Exception as e:
            self._record_failure('load_scripts', None, start_time, e)
            self._transition(InitializationState.FAILED)
            raise ScriptReadError("custom scripts", e) from e

    def _execute(self, position, statement):
        start_time = datetime.now()
        logger.debug("Executing custom command %d:\n%s", position, statement)
        try:
            self.store.execute(statement)
        except Exception as e:
            self._record_failure('custom_command', position, start_time, e, statement)
            self._transition(InitializationState.FAILED)
            raise ExecutionError(
                f"Custom command {position} failed: {e}",
                statement=statement,
                position=position,
            ) from e
        self._record_success('custom_command', position, start_time, statement)

    def _transition(self, state):
        log = logger.error if state is InitializationState.FAILED else logger.info
        log("Schema initialization: %s -> %s", self.state.value, state.value)
        self.state = state

    def _record_success(self, step, position, start_time, statement=None):
        """Record successful step"""
        self.results.append(self._result(step, position, start_time, 'SUCCESS', statement))

    def _record_failure(self, step, position, start_time, error, statement=None):
        """Record failed step"""
        result = self._result(step, position, start_time, 'FAILED', statement)
        result['error'] = str(error)
        self.results.append(result)

    @staticmethod
    def _result(step, position, start_time, status, statement):
        end_time = datetime.now()
        return {
            'step': step,
            'position': position,
            'status': status,
            'statement': statement,
            'duration_seconds': round((end_time - start_time).total_seconds(), 4),
            'timestamp': end_time.isoformat(),
        }


class PrepareOnce:
    """
    Runs an initializer at most once per process.

    The outcome of the first call is cached. Later calls return the same
    state or raise the same error without touching the database again, so a
    failed pass is never mistaken for a present schema.
    """

    def __init__(self, initializer):
        self.initializer = initializer
        self._lock = threading.Lock()
        self._result = None
        self._error = None

    @property
    def done(self):
        return self._result is not None or self._error is not None

    def __call__(self):
        with self._lock:
            if self._error is not None:
                raise self._error
            if self._result is None:
                try:
                    self._result = self.initializer.prepare()
                except Exception as e:
                    self._error = e
                    raise
            return self._result
