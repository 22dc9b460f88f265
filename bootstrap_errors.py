"""
Bootstrap Errors
Exception types raised while preparing a database
"""


class BootstrapError(Exception):
    """Base class for every bootstrap failure"""


class ConfigurationError(BootstrapError, ValueError):
    """Invalid or incomplete bootstrap configuration"""


class ScriptNotFoundError(ConfigurationError, FileNotFoundError):
    """A mandatory script file does not exist"""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Specified file doesn't exist - {self.path}")

    def __str__(self):
        return f"Specified file doesn't exist - {self.path}"


class UnsupportedBackendError(ConfigurationError):
    """No capability descriptor is registered for a database dialect"""

    def __init__(self, dialect):
        self.dialect = dialect
        super().__init__(f"Unsupported database backend: {dialect}")


class ExecutionError(BootstrapError):
    """
    A statement was rejected by the database.

    Attributes:
        statement: SQL text that failed (None for the create-schema step)
        position: 0-based index in the concatenated custom command batch
    """

    def __init__(self, message, statement=None, position=None):
        super().__init__(message)
        self.statement = statement
        self.position = position


class ScriptReadError(BootstrapError):
    """A script file exists but cannot be read or decoded"""

    def __init__(self, path, reason):
        self.path = str(path)
        super().__init__(f"Cannot read script {self.path}: {reason}")
