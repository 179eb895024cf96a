"""
Configuration Validator Module
Validates discovery configuration files and catalog records against JSON schemas.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonlines
import structlog
from jsonschema import Draft7Validator, FormatChecker, ValidationError
from rich.console import Console

console = Console()
logger = structlog.get_logger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas"


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    pass


class ConfigValidator:
    """Validates configuration files and catalog records against JSON schemas."""

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        """
        Initialize validator with schema directory.

        Args:
            schema_dir: Path to directory containing JSON schemas
        """
        self.schema_dir = schema_dir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load JSON schema from file.

        Args:
            schema_name: Schema filename (e.g., "discovery_params_schema.json")

        Returns:
            Loaded schema dictionary

        Raises:
            ConfigurationError: If schema file not found or invalid
        """
        if schema_name in self._schemas:
            logger.debug("schema_loaded_from_cache", schema_name=schema_name)
            return self._schemas[schema_name]

        schema_path = self.schema_dir / schema_name
        if not schema_path.exists():
            logger.error(
                "schema_not_found",
                schema_name=schema_name,
                schema_path=str(schema_path),
            )
            raise ConfigurationError(f"Schema file not found: {schema_path}")

        try:
            with open(schema_path, "r", encoding="utf-8") as f:
                schema = json.load(f)
            self._schemas[schema_name] = schema
            logger.info(
                "schema_loaded", schema_name=schema_name, schema_path=str(schema_path)
            )
            return schema
        except json.JSONDecodeError as e:
            logger.error("schema_invalid_json", schema_name=schema_name, error=str(e))
            raise ConfigurationError(f"Invalid JSON in schema {schema_name}: {e}")

    def validate(self, config: Dict[str, Any], schema_name: str) -> None:
        """
        Validate a configuration dictionary or catalog record against a schema.

        Args:
            config: Dictionary to validate
            schema_name: Schema filename to validate against

        Raises:
            ConfigurationError: If validation fails with detailed error messages
        """
        logger.debug("validating_config", schema_name=schema_name)
        schema = self.load_schema(schema_name)
        validator = Draft7Validator(schema, format_checker=FormatChecker())

        errors = list(validator.iter_errors(config))
        if not errors:
            logger.debug("validation_passed", schema_name=schema_name)
            return

        logger.warning(
            "validation_failed", schema_name=schema_name, error_count=len(errors)
        )
        error_messages = self._format_validation_errors(errors, schema_name)
        raise ConfigurationError("\n".join(error_messages))

    def validate_file(self, config_path: Path, schema_name: str) -> Dict[str, Any]:
        """
        Load and validate a JSON configuration file.

        Args:
            config_path: Path to configuration JSON file
            schema_name: Schema filename to validate against

        Returns:
            Validated configuration dictionary

        Raises:
            ConfigurationError: If file not found or validation fails
        """
        logger.debug(
            "validating_file", config_path=str(config_path), schema_name=schema_name
        )

        if not config_path.exists():
            logger.error("config_file_not_found", config_path=str(config_path))
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(
                "config_invalid_json", config_path=str(config_path), error=str(e)
            )
            raise ConfigurationError(
                f"Invalid JSON in {config_path.name}: {e}\n"
                f"Check for trailing commas, missing quotes, or invalid syntax."
            )

        self.validate(config, schema_name)
        logger.info(
            "file_validation_complete",
            config_path=str(config_path),
            schema_name=schema_name,
        )
        return config

    def validate_jsonl_file(self, records_path: Path, schema_name: str) -> int:
        """
        Validate every record of a JSONL catalog export.

        Args:
            records_path: Path to JSONL file
            schema_name: Schema filename each record must satisfy

        Returns:
            Number of validated records

        Raises:
            ConfigurationError: If file not found, a line is not valid JSON,
                or a record fails validation (message names the line)
        """
        if not records_path.exists():
            logger.error("records_file_not_found", records_path=str(records_path))
            raise ConfigurationError(f"Records file not found: {records_path}")

        count = 0
        try:
            with jsonlines.open(records_path) as reader:
                for line_number, record in enumerate(reader, start=1):
                    try:
                        self.validate(record, schema_name)
                    except ConfigurationError as e:
                        raise ConfigurationError(
                            f"{records_path.name} line {line_number}:{e}"
                        ) from e
                    count += 1
        except jsonlines.InvalidLineError as e:
            logger.error(
                "records_invalid_json", records_path=str(records_path), error=str(e)
            )
            raise ConfigurationError(f"Invalid JSON in {records_path.name}: {e}")

        logger.info(
            "records_validation_complete",
            records_path=str(records_path),
            record_count=count,
        )
        return count

    def _format_validation_errors(
        self, errors: List[ValidationError], schema_name: str
    ) -> List[str]:
        """
        Format validation errors into user-friendly messages.

        Args:
            errors: List of validation errors from jsonschema
            schema_name: Schema name for context

        Returns:
            List of formatted error messages
        """
        messages = [f"\n[X] Validation failed for {schema_name}:\n"]

        for error in errors:
            path = " -> ".join([str(p) for p in error.absolute_path]) or "(root)"

            if error.validator == "required":
                missing_field = error.message.split("'")[1]
                messages.append(
                    f"  * Missing required field: '{missing_field}' at {path}\n"
                    f"    -> Add this field to the record"
                )
            elif error.validator == "type":
                messages.append(
                    f"  * Type mismatch at '{path}': {error.message}\n"
                    f"    -> Expected type: {error.validator_value}"
                )
            elif error.validator == "minLength":
                messages.append(f"  * Value too short at '{path}': {error.message}")
            elif error.validator in ("minimum", "exclusiveMinimum"):
                messages.append(f"  * Value too small at '{path}': {error.message}")
            elif error.validator in ("maximum", "exclusiveMaximum"):
                messages.append(f"  * Value too large at '{path}': {error.message}")
            elif error.validator == "enum":
                messages.append(
                    f"  * Invalid value at '{path}': {error.message}\n"
                    f"    -> Allowed values: {error.validator_value}"
                )
            else:
                messages.append(f"  * Validation error at '{path}': {error.message}")

        messages.append("\n[!] Fix the errors above and try again.\n")
        return messages

    def validate_all_configs(
        self,
        catalog_dir: Path,
        discovery_params_path: Optional[Path] = None,
    ) -> Dict[str, Any]:
        """
        Validate the catalog export and, if present, the discovery parameters.

        Args:
            catalog_dir: Directory holding advisors.jsonl
            discovery_params_path: Optional path to discovery parameters JSON

        Returns:
            Dictionary: {"advisor_count": int, "discovery_params": {...}}

        Raises:
            ConfigurationError: If any validation fails
        """
        console.print("\n[*] Validating discovery inputs...\n")

        results: Dict[str, Any] = {}

        console.print("  Validating advisor catalog...")
        results["advisor_count"] = self.validate_jsonl_file(
            catalog_dir / "advisors.jsonl", "advisor_record_schema.json"
        )
        console.print(f"  [+] {results['advisor_count']} advisor records valid\n")

        if discovery_params_path and discovery_params_path.exists():
            console.print("  Validating discovery parameters...")
            results["discovery_params"] = self.validate_file(
                discovery_params_path, "discovery_params_schema.json"
            )
            console.print("  [+] Discovery parameters valid\n")
        else:
            console.print("  [i] No discovery parameters file provided, using defaults\n")
            results["discovery_params"] = {}

        console.print("[+] All discovery inputs validated successfully!\n")
        return results
