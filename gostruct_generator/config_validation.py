# File: gostruct_generator/config_validation.py
from argparse import Namespace
import sys
import logging
import os
import re
from typing import List, Optional, Dict, Any, Self
import yaml
from pathlib import Path

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
    ConfigDict,
)

from gostruct_generator.constants import DefaultConfig, SupportedDatabases
from gostruct_generator.domain.models import GenerationOptions
from gostruct_generator.domain.naming import is_exported_identifier

logger = logging.getLogger(__name__)

GO_PACKAGE_NAME_RE = re.compile(r"^[a-z_][a-z0-9_]*$")

# CLI dest names that differ from the schema keys
CLI_KEY_ALIASES = {"table": "tables"}


# --- Pydantic Models for Configuration Schema ---
class DatabaseSettings(BaseModel):
    """Schema for a single database connection within the DATABASES dict."""

    ENGINE: str = Field(
        ...,
        min_length=1,
        description="Django database engine (e.g., 'django.db.backends.mysql').",
    )
    NAME: str = Field(..., min_length=1, description="Database name (or SQLite file path).")
    USER: Optional[str] = Field(default=None, description="Database user.")
    PASSWORD: Optional[str] = Field(default=None, description="Database password.")
    HOST: Optional[str] = Field(default=None, description="Database host address.")
    PORT: Optional[int] = Field(default=None, description="Database port number.")
    OPTIONS: Dict[str, Any] = Field(
        default_factory=dict, description="Database engine specific options."
    )

    @field_validator("ENGINE")
    @classmethod
    def validate_engine(cls, v: str) -> str:
        """Ensure engine is one the introspection layer understands."""
        if v not in SupportedDatabases.SUPPORTED:
            raise ValueError(
                f"Database engine: {v} is not supported. Supported engines are: {', '.join(SupportedDatabases.SUPPORTED)}"
            )
        return v

    @field_validator("PORT", mode="before")
    @classmethod
    def validate_port(cls, v: Any) -> Optional[int]:
        """Ensure port is a number or string representation of one, and within range."""
        if v is None or v == "":
            return None
        if isinstance(v, bool):
            raise ValueError("Port must be an integer or string containing digits, got bool")
        if isinstance(v, int):
            port_num = v
        elif isinstance(v, str):
            if not v.isdigit():
                raise ValueError(
                    f"Port must be a number or string containing only digits, got '{v}'"
                )
            port_num = int(v)
        else:
            raise ValueError(
                f"Port must be an integer or string containing digits, got {type(v).__name__}"
            )

        if not 0 <= port_num <= 65535:
            raise ValueError(f"Port must be between 0 and 65535, got {port_num}")
        return port_num


class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    databases: Dict[str, DatabaseSettings] = Field(
        ...,
        description="Django DATABASES setting dictionary. Must contain a 'default' key.",
    )
    tables: Optional[List[str]] = Field(
        default=None,
        description="Tables to generate structs for. All tables when omitted.",
    )
    exclude_tables: Optional[List[str]] = Field(
        default=None, description="Optional list of table names to skip."
    )
    struct_name: Optional[str] = Field(
        default=None,
        description="Struct name override. Only valid when exactly one table is selected.",
    )
    package_name: str = Field(
        default=DefaultConfig.PACKAGE_NAME,
        min_length=1,
        description="Go package name of the generated files.",
    )
    output_dir: str = Field(
        default=DefaultConfig.OUTPUT_DIR,
        min_length=1,
        description="Directory the generated .go files are written to.",
    )
    json_annotation: bool = Field(
        default=DefaultConfig.JSON_ANNOTATION, description="Emit json struct tags."
    )
    gorm_annotation: bool = Field(
        default=DefaultConfig.GORM_ANNOTATION, description="Emit gorm struct tags."
    )
    validate_annotation: bool = Field(
        default=DefaultConfig.VALIDATE_ANNOTATION,
        description="Emit validate (go-playground/validator) struct tags.",
    )
    guregu_types: bool = Field(
        default=DefaultConfig.GUREGU_TYPES,
        description="Use gopkg.in/guregu/null.v3 wrappers for nullable columns instead of database/sql ones.",
    )

    # Internal field, usually added by load_config if not provided by user
    SECRET_KEY: Optional[str] = Field(
        default=None, description="Internal secret key for Django setup."
    )

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to a configuration key, e.g. config["databases"]."""
        return getattr(self, key)

    def generation_options(self) -> GenerationOptions:
        """The four generation toggles as the domain layer expects them."""
        return GenerationOptions(
            json_annotation=self.json_annotation,
            gorm_annotation=self.gorm_annotation,
            validate_annotation=self.validate_annotation,
            use_alternate_null_wrappers=self.guregu_types,
        )

    # --- Custom Field Validators ---

    @field_validator("package_name")
    @classmethod
    def check_package_name(cls, v: str) -> str:
        """Go package names are lower-case identifiers."""
        if not GO_PACKAGE_NAME_RE.match(v):
            raise ValueError(
                f"'{v}' is not a valid Go package name. Use lower-case letters, digits and underscores."
            )
        return v

    @field_validator("struct_name")
    @classmethod
    def check_struct_name(cls, v: Optional[str]) -> Optional[str]:
        """The struct must be exported so the generated package can be used."""
        if v is not None and not is_exported_identifier(v):
            raise ValueError(
                f"'{v}' is not an exported Go identifier. Start it with an upper-case letter."
            )
        return v

    @field_validator("tables", "exclude_tables", mode="before")
    @classmethod
    def check_table_names_list(cls, v: Optional[List[Any]]) -> Optional[List[str]]:
        """Ensure items in table lists are non-empty strings."""
        if v is None:
            return None
        if not isinstance(v, list):
            raise ValueError("tables/exclude_tables must be a list.")
        processed_list = []
        for index, item in enumerate(v):
            if not isinstance(item, str):
                raise ValueError(
                    f"Item at index {index} must be a string, found: {type(item).__name__}"
                )
            stripped_item = item.strip()
            if not stripped_item:
                raise ValueError(
                    f"Item at index {index} cannot be empty or just whitespace."
                )
            processed_list.append(stripped_item)
        return processed_list

    # --- Custom Model Validator ---
    @model_validator(mode="after")
    def check_cross_field_config(self) -> Self:
        """Perform cross-field validation checks."""
        if "default" not in self.databases:
            raise ValueError(
                "The 'databases' configuration dictionary must contain a 'default' key."
            )

        if self.struct_name and (not self.tables or len(self.tables) != 1):
            raise ValueError(
                "'struct_name' can only be set when exactly one table is selected."
            )

        if not self.generation_options().any_annotation:
            logger.debug("All struct tags are disabled; fields will be generated without tags.")

        return self

    model_config = ConfigDict(
        extra="ignore",  # Allow and ignore extra fields from input dict
    )


# --- Validation Function ---
def validate_and_parse_config(config_dict: Dict[str, Any]) -> ToolConfigSchema:
    """
    Validates a raw configuration dictionary against the ToolConfigSchema.
    Exits with error messages if validation fails.
    """
    try:
        validated_config = ToolConfigSchema.model_validate(config_dict)
        logger.debug(
            "Configuration dictionary parsed and validated successfully against schema."
        )
        return validated_config
    except ValidationError as e:
        logger.critical(
            "Configuration validation failed! Please check your config file or arguments."
        )
        print("\n--- Configuration Errors ---", file=sys.stderr)
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            msg = error.get("msg", "Unknown validation error")

            print(f"  - Location: '{loc_str}'", file=sys.stderr)
            print(f"    Error:    {msg}", file=sys.stderr)

            if "PORT" in loc_parts:
                print("    Hint:     Port must be a number between 0 and 65535.", file=sys.stderr)
            elif "ENGINE" in loc_parts:
                print(
                    f"    Hint:     Use one of: {', '.join(SupportedDatabases.SUPPORTED)}",
                    file=sys.stderr,
                )
            elif "package_name" in loc_parts:
                print("    Hint:     Go package names look like 'model' or 'dbmodels'.", file=sys.stderr)

        print("----------------------------", file=sys.stderr)
        sys.exit(1)


def load_config(config_path: Optional[str], cli_args: Namespace) -> ToolConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.
    Exits with error messages if validation fails.
    """
    raw_config: Dict[str, Any] = {}

    # 1. Load from YAML file if path is provided
    if config_path:
        try:
            config_file = Path(config_path)
            if config_file.is_file():
                with open(config_file, "r", encoding="utf-8") as f:
                    yaml_config = yaml.safe_load(f)
                    if yaml_config and isinstance(yaml_config, dict):
                        raw_config.update(yaml_config)
                        logger.debug(f"Loaded configuration from {config_path}")
                    elif yaml_config:
                        logger.warning(
                            f"Content in config file {config_path} is not a dictionary. Ignoring file content."
                        )
            else:
                logger.warning(
                    f"Config file not found at {config_path}. Using defaults and CLI arguments."
                )
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML file {config_path}: {e}")
            logger.warning("Proceeding with defaults and CLI arguments only.")
        except OSError as e:
            logger.error(f"Error reading config file {config_path}: {e}")
            logger.warning("Proceeding with defaults and CLI arguments only.")

    # 2. Override with CLI arguments (only those explicitly provided)
    cli_dict = vars(cli_args)
    overridden_keys = set()
    for key, value in cli_dict.items():
        key = CLI_KEY_ALIASES.get(key, key)
        if (
            value is not None and key != "databases" and key in ToolConfigSchema.model_fields
        ):
            raw_config[key] = value
            overridden_keys.add(key)
    if overridden_keys:
        logger.debug(f"Overridden config keys from CLI arguments: {overridden_keys}")

    # 3. Add internal SECRET_KEY if not present (needed for django.setup)
    if "SECRET_KEY" not in raw_config:
        raw_config["SECRET_KEY"] = os.urandom(50).hex()

    # 4. Validate
    logger.info("Validating final configuration...")
    validated_config: ToolConfigSchema = validate_and_parse_config(raw_config)

    # 5. Post-validation adjustments
    validated_config.output_dir = str(Path(validated_config.output_dir).resolve())

    logger.info("Configuration loaded and validated successfully.")
    return validated_config
