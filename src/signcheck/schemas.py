"""JSON Schema generation and checking for signcheck configuration files."""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
from pydantic import BaseModel

from .config import SigncheckConfig

logger = logging.getLogger(__name__)

JSON_SCHEMA_DRAFT = "https://json-schema.org/draft/2020-12/schema"


class SchemaIssue:
    """Represents a schema validation error."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class SchemaGenerator:
    """Generates JSON schemas from Pydantic models for editor support and CI checks."""

    def __init__(self):
        self.schemas: dict[str, dict[str, Any]] = {}

    def generate_all_schemas(self) -> dict[str, dict[str, Any]]:
        """Generate JSON schemas for all signcheck file formats.

        Returns:
            Dictionary mapping schema names to JSON schemas
        """
        self.schemas = {
            "config": self._model_to_schema(
                SigncheckConfig,
                "signcheck-config-v1",
                "JSON Schema for signcheck .signcheck.json configuration files",
            ),
        }
        logger.info(f"Generated {len(self.schemas)} JSON schemas")
        return self.schemas

    def save_schemas(self, output_dir: Path) -> dict[str, Path]:
        """Save generated schemas to ``<name>.schema.json`` files.

        Args:
            output_dir: Directory to save schema files

        Returns:
            Dictionary mapping schema names to file paths
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        schema_files = {}

        for schema_name, schema in self.schemas.items():
            schema_file = output_dir / f"{schema_name}.schema.json"
            with open(schema_file, "w", encoding="utf-8") as f:
                json.dump(schema, f, indent=2, ensure_ascii=False)
            schema_files[schema_name] = schema_file
            logger.debug(f"Saved schema: {schema_file}")

        return schema_files

    def validate_schema_compliance(self) -> list[str]:
        """Check generated schemas against the JSON Schema meta-schema.

        Returns:
            List of errors (empty if all schemas are valid)
        """
        errors = []
        for schema_name, schema in self.schemas.items():
            try:
                jsonschema.Draft202012Validator.check_schema(schema)
            except jsonschema.SchemaError as e:
                error_msg = f"Schema {schema_name} is invalid: {e.message}"
                errors.append(error_msg)
                logger.error(error_msg)
        return errors

    def validate_config_file(self, config_path: Path) -> list[SchemaIssue]:
        """Validate a configuration file against the config schema.

        Args:
            config_path: Path to a ``.signcheck.json`` file

        Returns:
            List of schema issues (empty if valid)
        """
        if "config" not in self.schemas:
            self.generate_all_schemas()

        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            return [SchemaIssue(str(config_path), f"Cannot read file: {e}")]
        except json.JSONDecodeError as e:
            return [SchemaIssue(str(config_path), f"Invalid JSON: {e}")]

        validator = jsonschema.Draft202012Validator(self.schemas["config"])
        return [
            SchemaIssue(error.json_path, error.message)
            for error in sorted(validator.iter_errors(data), key=lambda e: e.json_path)
        ]

    @staticmethod
    def _model_to_schema(model_class: type[BaseModel], title: str, description: str) -> dict[str, Any]:
        schema = model_class.model_json_schema(by_alias=True)
        schema["$schema"] = JSON_SCHEMA_DRAFT
        schema["title"] = title
        schema["description"] = description
        return schema
