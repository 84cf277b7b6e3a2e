"""CLI entry point for the weather lookup pipeline."""

import argparse
import asyncio
import logging
import sys

from weatherwatch.config.loader import get_config_value, load_config
from weatherwatch.config.schema import OutputFormat, PipelineMode
from weatherwatch.errors import PipelineFailure, WeatherWatchError
from weatherwatch.pipeline.fetch_pipeline import build_pipeline
from weatherwatch.reporting.formatters import render

DEFAULT_CONFIG = "weatherwatch.yaml"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherwatch",
        description="Sequential city -> coordinates -> weather lookup",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # demo
    demo_p = sub.add_parser("demo", help="Run the offline simulated pipeline")
    demo_p.add_argument("--city", default=None, help="Seed city name")
    demo_p.add_argument(
        "--delay", type=float, default=None, help="Seconds to wait per stage"
    )
    demo_p.add_argument(
        "--format", choices=[f.value for f in OutputFormat], default=None
    )

    # fetch
    fetch_p = sub.add_parser("fetch", help="Look up live weather for a city")
    fetch_p.add_argument("city", nargs="?", default=None, help="City name")
    fetch_p.add_argument(
        "--format", choices=[f.value for f in OutputFormat], default=None
    )

    # run
    run_p = sub.add_parser("run", help="Run the pipeline in the configured mode")
    run_p.add_argument("city", nargs="?", default=None, help="City name")
    run_p.add_argument(
        "--format", choices=[f.value for f in OutputFormat], default=None
    )

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    show_p = config_sub.add_parser("show", help="Display current config")
    show_p.add_argument("key", nargs="?", help="Dotted key, e.g. openweather.units")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs, which carry the appid query parameter
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    config = load_config(args.config)

    try:
        if args.command == "demo":
            return _cmd_demo(config, args)
        elif args.command == "fetch":
            return _cmd_fetch(config, args)
        elif args.command == "run":
            return _cmd_run(config, args)
        elif args.command == "config":
            return _cmd_config(config, args)
    except WeatherWatchError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    parser.print_help()
    return 1


def _cmd_demo(config, args) -> int:
    if args.delay is not None:
        config = config.model_copy(
            update={
                "pipeline": config.pipeline.model_copy(
                    update={"simulated_delay_seconds": args.delay}
                )
            }
        )
    pipeline = build_pipeline(config, mode=PipelineMode.SIMULATED)
    report = asyncio.run(pipeline.run(args.city))
    _render(config, report, args.format)
    return 0


def _cmd_fetch(config, args) -> int:
    return _run_and_render(config, args, PipelineMode.LIVE)


def _cmd_run(config, args) -> int:
    return _run_and_render(config, args, config.pipeline.mode)


def _run_and_render(config, args, mode: PipelineMode) -> int:
    city = args.city or config.pipeline.default_city
    pipeline = build_pipeline(config, mode=mode)
    try:
        report = asyncio.run(pipeline.run(city))
    except PipelineFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    _render(config, report, args.format)
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        if args.key is None:
            print(config.model_dump_json(indent=2))
            return 0
        try:
            print(get_config_value(config, args.key))
            return 0
        except KeyError as e:
            print(f"Error: {e}")
            return 1
    print("Use: config show [key]")
    return 1


def _render(config, report, fmt: str | None) -> None:
    render(
        report,
        sys.stdout,
        fmt or config.output.format,
        icon_base_url=config.openweather.icon_base_url,
    )
