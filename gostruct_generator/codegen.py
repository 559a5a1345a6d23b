import logging
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from gostruct_generator.codegen_utils import format_go_code_using_gofmt
from gostruct_generator.constants import MODEL_TEMPLATE_NAME, FileExtensions
from gostruct_generator.domain.models import ModelInfo
from gostruct_generator.exceptions import CodeGenerationError


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        # Go source, not markup: struct tags must keep their double quotes
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    return env


def render_template(env: Environment, template_name: str, context: Dict[str, Any]) -> str:
    """Renders a Jinja template to a string."""
    try:
        template = env.get_template(template_name)
        return template.render(context)
    except TemplateError as e:
        logger.error(f"Error rendering template '{template_name}': {e}", exc_info=True)
        raise CodeGenerationError(
            f"Could not render template '{template_name}': {e}"
        ) from e


def render_model(model_info: ModelInfo, env: Environment = None) -> str:
    """Renders the Go source for one struct."""
    env = env or setup_jinja_env()
    return render_template(env, MODEL_TEMPLATE_NAME, {"model": model_info})


def model_output_path(model_info: ModelInfo, output_dir: Path) -> Path:
    return Path(output_dir) / f"{model_info.table_name}{FileExtensions.GO}"


def generate_model_file(model_info: ModelInfo, output_dir: Path, env: Environment = None) -> Path:
    """Renders a struct, formats it with gofmt when available and saves it as <table>.go."""
    output_path = model_output_path(model_info, output_dir)
    rendered_content = render_model(model_info, env)
    final_content = format_go_code_using_gofmt(output_path, rendered_content)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(final_content)
    except OSError as e:
        logger.error(f"Error writing '{output_path}': {e}", exc_info=True)
        raise CodeGenerationError(
            f"Could not write generated struct for table '{model_info.table_name}': {e}",
            table=model_info.table_name,
            output_path=str(output_path),
        ) from e

    logger.info(f"Generated file: {output_path}")
    return output_path
