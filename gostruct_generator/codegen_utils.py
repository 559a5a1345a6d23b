import logging
import shutil
import subprocess
from pathlib import Path


logger = logging.getLogger(__name__)

GOFMT_TIMEOUT_SECONDS = 30


def find_gofmt() -> str:
    """Returns the gofmt executable path, or an empty string when it is not installed."""
    return shutil.which("gofmt") or ""


def format_go_code_using_gofmt(filepath: Path, code_string: str) -> str:
    """Formats the given Go code using gofmt, returning it unchanged when gofmt is unavailable."""
    gofmt = find_gofmt()
    if not gofmt:
        logger.debug(f"gofmt not found on PATH; writing unformatted Go code: {filepath}")
        return code_string

    try:
        result = subprocess.run(
            [gofmt],
            input=code_string,
            capture_output=True,
            text=True,
            timeout=GOFMT_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.error(f"Could not run gofmt: {e}")
        logger.warning("Writing unformatted Go code due to gofmt error.")
        return code_string

    if result.returncode != 0:
        logger.error(f"gofmt rejected generated code for {filepath}: {result.stderr.strip()}")
        logger.warning("Writing unformatted Go code due to gofmt error.")
        return code_string

    logger.debug(f"Formatted code using gofmt: {filepath}")
    return result.stdout
