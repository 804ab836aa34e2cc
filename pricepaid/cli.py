"""CLI entrypoint for the London price paid aggregation pipeline."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pricepaid.common.config_loader import ConfigBundle, load_all_configs
from pricepaid.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS, STAGES
from pricepaid.common.errors import PipelineError
from pricepaid.common.logging import build_logger, close_logger, log_event, log_failure
from pricepaid.common.time_utils import generate_run_id
from pricepaid.pipeline.build import output_paths, run_aggregate
from pricepaid.pipeline.fetch import run_fetch, source_path


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=[*STAGES, "all"])
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--input", default=None, help="price paid CSV; defaults to <data-dir>/raw/<source.filename>")
    parser.add_argument("--output", default=None, help="aggregate JSON; defaults to <data-dir>/out/<output.filename>")
    parser.add_argument("--min-year", type=int, default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--force-download", action="store_true")
    parser.add_argument("--skip-malformed", action="store_true", default=None)
    return parser.parse_args(argv)


def execute_stage(stage: str, args: argparse.Namespace, bundle: ConfigBundle, logger, run_id: str) -> None:
    data_dir = Path(args.data_dir)
    source = Path(args.input) if args.input else source_path(bundle.pipeline, data_dir)
    if stage == "fetch":
        run_fetch(bundle.pipeline, source, logger, run_id, force=args.force_download)
    elif stage == "aggregate":
        default_output, summary = output_paths(bundle.pipeline, data_dir)
        run_aggregate(
            bundle.pipeline,
            bundle.locations,
            source,
            Path(args.output) if args.output else default_output,
            summary,
            logger,
            run_id,
            min_year=args.min_year,
            skip_malformed=args.skip_malformed,
        )
    else:
        raise ValueError(f"Unknown stage: {stage}")


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    data_dir = Path(args.data_dir)
    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    stages = STAGES if args.command == "all" else (args.command,)

    try:
        try:
            bundle = load_all_configs(
                Path(args.config_dir),
                overlay_config_dir=Path(args.overlay_config_dir) if args.overlay_config_dir else None,
            )
        except PipelineError as exc:
            log_failure(
                logger,
                f"configuration failed: {exc}",
                run_id=run_id,
                stage="config",
                event="STAGE_FAIL",
                status="error",
                error_code=exc.error_code,
            )
            return EXIT_HARD_FAIL

        for stage in stages:
            log_event(logger, "stage start", run_id=run_id, stage=stage, event="STAGE_START", status="ok")
            try:
                execute_stage(stage, args, bundle, logger, run_id)
            except PipelineError as exc:
                log_failure(
                    logger,
                    f"stage {stage} failed: {exc}",
                    run_id=run_id,
                    stage=stage,
                    event="STAGE_FAIL",
                    status="error",
                    error_code=exc.error_code,
                )
                return EXIT_HARD_FAIL
            except Exception as exc:
                log_failure(
                    logger,
                    f"unexpected failure in stage {stage}: {exc!r}",
                    run_id=run_id,
                    stage=stage,
                    event="STAGE_FAIL",
                    status="error",
                    error_code="UNEXPECTED_ERROR",
                )
                return EXIT_HARD_FAIL
            log_event(logger, "stage end", run_id=run_id, stage=stage, event="STAGE_END", status="ok")
    finally:
        close_logger(logger)

    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except PipelineError:
        return EXIT_HARD_FAIL
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
