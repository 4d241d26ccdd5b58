from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from imigrate.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from imigrate.converters import ConversionError
from imigrate.excel.reader import TableReadError, read_table
from imigrate.logging.init import enable_debug, log_summary, setup_logging
from imigrate.services.orchestrator import ProcessingError, run_conversion
from imigrate.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- load .env, then the YAML run configuration
- --inspect-data: print each input file's sheet, header and first rows, exit
- otherwise run the conversion, write the workbook, print one SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_DEGRADED = 2  # output written, but some materials kept their raw IDs

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env with python-dotenv; existing environment variables win by default."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="imigrate", description="Dispatch system export -> import sheet converter")
    p.add_argument("--config", type=Path, default=None, help=f"Run configuration (default {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    return p.parse_args(argv)


def _config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env = os.getenv("IMIGRATE_CONFIG")
    return Path(env) if env else DEFAULT_CONFIG_PATH


def _inspect_data(cfg) -> int:
    for name in cfg.input_files:
        path = Path(name)
        print(f"FILE: {path.name}")
        try:
            sheet = read_table(path, keep_na_strings=cfg.keep_na_strings)
        except TableReadError as e:
            print(f"  read_error: {e}")
            continue
        print(f"  SHEET: {sheet.sheet_name} rows={len(sheet.rows)} cols={sheet.header}")
        for row in sheet.rows[1:1 + INSPECT_SAMPLE_ROWS]:
            print(f"    {row}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    config_path = _config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Converting {cfg.dispatch_system} {cfg.entity_type}: {', '.join(cfg.input_files)}")
    try:
        result = run_conversion(cfg)
    except ConversionError as e:
        logger.error(f"conversion: {e}")
        return EXIT_FATAL
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.degraded:
        logger.warning(f"{len(result.output.unresolved)} material(s) kept their raw IDs")
        return EXIT_DEGRADED
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
