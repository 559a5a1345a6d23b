import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gostruct_generator.introspection_django import (
    setup_django,
    list_tables,
    introspect_table,
)
from gostruct_generator.config_validation import ToolConfigSchema, load_config
from gostruct_generator.mapper import build_model_info
from gostruct_generator.codegen import generate_model_file, setup_jinja_env
from gostruct_generator.exceptions import GoStructGeneratorError, raise_configuration_error
from gostruct_generator.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_success,
    log_progress,
    log_highlight,
    log_section,
)

# Handlers are configured in main() after parsing args
logger = get_colored_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gostruct-gen",
        description="Generate Go struct definitions from existing database tables.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to the YAML configuration file (containing a Django DATABASES dict).",
    )
    parser.add_argument(
        "-t",
        "--table",
        action="append",
        help="Table to generate a struct for. Repeat for several tables. Defaults to all tables.",
    )
    parser.add_argument(
        "--struct",
        dest="struct_name",
        help="Name of the generated struct. Only valid with a single --table.",
    )
    parser.add_argument(
        "-p",
        "--package",
        dest="package_name",
        help="Go package name of the generated files.",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        help="Directory to write the .go files to. Overrides config file setting.",
    )
    parser.add_argument(
        "--json",
        dest="json_annotation",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Add json struct tags.",
    )
    parser.add_argument(
        "--gorm",
        dest="gorm_annotation",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Add gorm struct tags.",
    )
    parser.add_argument(
        "--validate",
        dest="validate_annotation",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Add validate struct tags.",
    )
    parser.add_argument(
        "--guregu",
        dest="guregu_types",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use gopkg.in/guregu/null.v3 types for nullable columns.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging for the generator tool.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return parser


def select_tables(config: ToolConfigSchema, available: List[str]) -> List[str]:
    """Applies the tables/exclude_tables settings to the tables found in the database."""
    exclude_set = set(config.exclude_tables or [])
    if config.tables:
        missing = [name for name in config.tables if name not in available]
        if missing:
            raise_configuration_error(
                f"Table(s) not found in database: {', '.join(missing)}",
                context={"available_tables": ", ".join(available)},
            )
        selected = list(config.tables)
    else:
        selected = list(available)

    for name in selected:
        if name in exclude_set:
            log_highlight(logger, f"Excluding table: {name}")
    return [name for name in selected if name not in exclude_set]


def generate(config: ToolConfigSchema, tables: List[str]) -> List[Path]:
    """Introspects each table and writes one .go file per table."""
    options = config.generation_options()
    env = setup_jinja_env()
    written = []
    for table_name in tables:
        log_progress(logger, f"Introspecting table '{table_name}'...")
        table = introspect_table(table_name)
        model_info = build_model_info(
            table,
            package_name=config.package_name,
            options=options,
            struct_name=config.struct_name,
        )
        written.append(generate_model_file(model_info, Path(config.output_dir), env))
    return written


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        # 1. Load Configuration
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)

        # 2. Setup Django Environment
        setup_django(config["databases"], config["SECRET_KEY"])

        # 3. Select tables
        log_section(logger, "Table Selection")
        tables = select_tables(config, list_tables())
        if not tables:
            logger.warning("No tables selected for generation. Exiting.")
            sys.exit(0)

        # 4. Generate one file per table
        log_section(logger, "Go Struct Generation")
        written = generate(config, tables)

        log_section(logger, "Completion")
        log_success(logger, f"Generated {len(written)} file(s) in {config.output_dir}")

    # --- Error Handling ---
    except GoStructGeneratorError as e:
        logger.error(str(e), exc_info=args.verbose)
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Configuration Error: {e}", exc_info=args.verbose)
        sys.exit(1)
    except RuntimeError as e:
        logger.error(f"Runtime Error: {e}", exc_info=args.verbose)
        sys.exit(1)
    except ImportError as e:
        logger.error(
            f"Import Error: {e}. Ensure Django and the database driver are installed.",
            exc_info=args.verbose,
        )
        logger.error("Example: pip install mysqlclient (for MySQL)")
        sys.exit(1)
    except Exception as e:
        logger.error(
            f"An unexpected error occurred during generation: {e}", exc_info=True
        )
        sys.exit(1)


# --- Script Entry Point ---
if __name__ == "__main__":
    main()
