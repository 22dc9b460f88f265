"""
Script Loader
Resolves SQL script files and reads them into command batches
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from bootstrap_errors import ConfigurationError, ScriptNotFoundError, ScriptReadError
from statement_splitter import StatementSplitter

logger = logging.getLogger(__name__)

ROLE_INDEXES = "indexes"
ROLE_STORED_PROCEDURES = "stored_procedures"

INSTALL_FOLDER = "Install"
WELL_KNOWN_FILE_NAMES = {
    ROLE_INDEXES: "{prefix}.Indexes.sql",
    ROLE_STORED_PROCEDURES: "{prefix}.StoredProcedures.sql",
}


@dataclass(frozen=True)
class ScriptFile:
    """A script identified by its logical role and filesystem path"""
    role: str
    path: Path
    required: bool = False


class ScriptLoader:
    """Loads SQL scripts and splits them into statements"""

    def __init__(self, encoding='utf-8-sig'):
        self.encoding = encoding

    def load(self, path, require_exists=False):
        """
        Load one script file as a command batch

        Args:
            path: Path to the script file
            require_exists: Fail instead of returning an empty batch
                when the file is missing

        Returns:
            list: Statements in file order

        Raises:
            ScriptNotFoundError: If the file is missing and require_exists is set
            ConfigurationError: If the path points to a directory
            ScriptReadError: If the file cannot be read or decoded
        """
        path = Path(path)

        if not path.exists():
            if require_exists:
                raise ScriptNotFoundError(path)
            logger.debug("Optional script not found, skipping: %s", path)
            return []

        if not path.is_file():
            raise ConfigurationError(f"Script is not a file: {path}")

        try:
            with open(path, 'r', encoding=self.encoding) as f:
                statements = list(StatementSplitter.iter_statements(f))
        except (OSError, UnicodeDecodeError) as e:
            raise ScriptReadError(path, e) from e

        logger.debug("Loaded %d statement(s) from %s", len(statements), path)
        return statements

    def load_all(self, script_files):
        """
        Load several scripts and concatenate their batches

        Args:
            script_files: Iterable of ScriptFile, in execution order

        Returns:
            list: Statements of all files, file order then statement order
        """
        commands = []
        for script in script_files:
            commands.extend(self.load(script.path, require_exists=script.required))
        return commands


class ScriptLocator:
    """Resolves script paths against an app data root folder"""

    def __init__(self, root):
        self.root = Path(root)

    def resolve(self, path):
        """Resolve a path relative to the root (absolute paths are kept)"""
        path = Path(path)
        return path if path.is_absolute() else (self.root / path).resolve()

    def well_known(self, role, prefix):
        """
        Build the path of a backend's well-known install script

        Args:
            role: ROLE_INDEXES or ROLE_STORED_PROCEDURES
            prefix: Backend script prefix (e.g. "SqlServer")

        Returns:
            Path: <root>/Install/<prefix>.<Role>.sql
        """
        if role not in WELL_KNOWN_FILE_NAMES:
            raise ConfigurationError(f"Unknown script role: {role}")
        file_name = WELL_KNOWN_FILE_NAMES[role].format(prefix=prefix)
        return self.resolve(Path(INSTALL_FOLDER) / file_name)
