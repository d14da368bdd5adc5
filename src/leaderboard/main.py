"""Main entry point: fetch every source and publish the aggregate artifact."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import NoReturn

from pydantic import ValidationError

from leaderboard.aggregator import Aggregator, PipelineResult
from leaderboard.config import Settings, get_settings, load_source_config
from leaderboard.http.client import HttpClient
from leaderboard.storage import write_artifact, write_empty_artifact

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH: Path = Settings.model_fields["output_path"].default


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging once for command-line runs.

    Invalid settings fall back to INFO here; the pipeline reports them.
    """
    if level is None:
        try:
            level = get_settings().log_level
        except ValidationError:
            level = "INFO"
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def run_pipeline(
    config_path: Path | str | None = None,
    output_path: Path | str | None = None,
    app_settings: Settings | None = None,
    client: HttpClient | None = None,
) -> PipelineResult:
    """
    Run the whole pipeline: load config, collect, merge, persist.

    Never raises for ordinary failures, invalid settings included.
    Anything that escapes the adapters is logged as fatal and an empty
    artifact is written in place of the real one, so consumers always
    find valid JSON.

    Args:
        config_path: Source configuration file (defaults to settings)
        output_path: Artifact destination (defaults to settings)
        app_settings: Settings override
        client: HTTP client override

    Returns:
        PipelineResult describing the run; its records are the rows
        actually published
    """
    result = PipelineResult()
    try:
        app_settings = app_settings or get_settings()
        output_path = Path(output_path or app_settings.output_path)
        config = load_source_config(config_path or app_settings.config_path)
        result = await Aggregator(config, app_settings, client=client).run()
        write_artifact(output_path, result.records)
    except Exception as e:
        logger.critical(f"Pipeline failed: {e}", exc_info=True)
        result.fatal_error = str(e) or type(e).__name__
        result.records = []
        output_path = Path(output_path or DEFAULT_OUTPUT_PATH)
        try:
            write_empty_artifact(output_path)
        except Exception as write_error:
            logger.critical(f"Could not write empty artifact to {output_path}: {write_error}")

    logger.info(f"Pipeline finished with status {result.status.value}")
    return result


def main() -> NoReturn:
    """
    Main entry point.

    Always exits 0, even after a fatal error.
    """
    configure_logging()
    asyncio.run(run_pipeline())
    sys.exit(0)


if __name__ == "__main__":
    main()
