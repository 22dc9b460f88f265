"""
Configuration Loader
Reads and validates YAML bootstrap configuration files
"""

import importlib
from pathlib import Path

import yaml

from bootstrap_errors import ConfigurationError


class ConfigLoader:
    """Loads and validates YAML configuration"""

    @staticmethod
    def load(config_path):
        """
        Load YAML config file and validate required fields

        Relative paths (scripts_dir, schema_script, reporting.output_file)
        are resolved against the folder holding the config file.

        Args:
            config_path: Path to YAML file

        Returns:
            dict: Parsed configuration

        Raises:
            ConfigurationError: If required fields are missing or invalid
        """
        config_path = Path(config_path)
        with open(config_path, 'r', encoding='utf-8-sig') as f:
            config = yaml.safe_load(f)

        ConfigLoader._validate_config(config)

        config_folder = config_path.resolve().parent
        config['scripts_dir'] = ConfigLoader._resolve(config.get('scripts_dir', '.'), config_folder)
        if config.get('schema_script'):
            config['schema_script'] = ConfigLoader._resolve(config['schema_script'], config['scripts_dir'])

        reporting = config['reporting']
        if reporting.get('output_file'):
            reporting['output_file'] = ConfigLoader._resolve(reporting['output_file'], config_folder)

        return config

    @staticmethod
    def load_model(import_path):
        """
        Import the model that describes the schema

        Args:
            import_path: "package.module:attribute" pointing to a MetaData
                or a declarative base

        Returns:
            sqlalchemy.MetaData
        """
        module_name, _, attribute = import_path.partition(':')
        if not module_name or not attribute:
            raise ConfigurationError(f"'model' must look like 'module:attribute', got '{import_path}'")

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ConfigurationError(f"Cannot import model module '{module_name}': {e}") from e

        target = module
        for part in attribute.split('.'):
            try:
                target = getattr(target, part)
            except AttributeError:
                raise ConfigurationError(f"Model '{import_path}' not found") from None

        metadata = getattr(target, 'metadata', target)
        if not hasattr(metadata, 'create_all'):
            raise ConfigurationError(f"Model '{import_path}' is not a MetaData or declarative base")
        return metadata

    @staticmethod
    def _resolve(path, base_path):
        path = Path(path)
        return path if path.is_absolute() else (Path(base_path) / path).resolve()

    @staticmethod
    def _validate_config(config):
        """
        Check that config has all required fields

        Required structure:
        - required_tables: [...]
        - model: "module:attr"  or  schema_script: "path"
        """
        if not isinstance(config, dict):
            raise ConfigurationError("Config must be a YAML object/dictionary")

        if 'required_tables' not in config:
            raise ConfigurationError("Config missing 'required_tables' section")

        tables = config['required_tables']
        if not isinstance(tables, list):
            raise ConfigurationError("'required_tables' must be a list")

        if len(tables) == 0:
            raise ConfigurationError("At least one required table is needed")

        for i, table in enumerate(tables):
            if not isinstance(table, str) or not table.strip():
                raise ConfigurationError(f"Required table {i} must be a non-empty string")

        if not config.get('model') and not config.get('schema_script'):
            raise ConfigurationError("Config needs either 'model' or 'schema_script'")

        for section in ('database', 'reporting'):
            # An empty section parses as None
            if config.get(section) is None:
                config[section] = {}
            if not isinstance(config[section], dict):
                raise ConfigurationError(f"'{section}' must be an object/dictionary")

        if 'scripts' in config:
            if not isinstance(config['scripts'], list):
                raise ConfigurationError("'scripts' must be a list")
            for i, script in enumerate(config['scripts']):
                ConfigLoader._validate_script(script, i)

    @staticmethod
    def _validate_script(script, index):
        """
        Validate a single script entry

        Required fields:
        - role: Logical role (e.g. indexes, stored_procedures)
        - path: Script path, relative to scripts_dir

        Optional:
        - required: true/false (default: false)
        """
        if not isinstance(script, dict):
            raise ConfigurationError(f"Script {index} must be an object/dictionary")

        if 'role' not in script:
            raise ConfigurationError(f"Script {index} missing 'role'")

        if 'path' not in script:
            raise ConfigurationError(f"Script {index} ({script['role']}) missing 'path'")

        if 'required' in script and not isinstance(script['required'], bool):
            raise ConfigurationError(f"Script {index} ({script['role']}) 'required' must be true/false")
