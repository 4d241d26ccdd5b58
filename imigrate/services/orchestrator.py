from __future__ import annotations

import dataclasses
import logging
from datetime import UTC, datetime
from pathlib import Path

from ..converters import (
    ConversionError,
    EntityType,
    get_converter,
    output_sheet_name,
)
from ..excel.reader import SUPPORTED_SUFFIXES, SheetData, TableReadError, read_table
from ..excel.writer import output_file_name, write_table
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ConvertConfig
from ..models.conversion_result import ConversionOutput, ConversionResult
from .progress import ProgressTracker
from .transform import TransformError, apply_transforms

"""Run orchestration: input files -> converter -> transforms -> output workbook.

The run is all-or-nothing: the output workbook is written only after the
conversion and every transform step succeeded.
"""

logger = logging.getLogger(__name__)

UNRESOLVED_MATERIAL_LOOKUP = "UNRESOLVED_MATERIAL_LOOKUP"


class ProcessingError(Exception):
    """Run-level failure (input files, transforms, output)."""
    pass


def validate_input_files(files: list[str], entity_type: EntityType) -> list[Path]:
    """Check extensions, count and existence of the configured input files.

    Raises:
        ProcessingError: no files, unsupported extension, too many files for
            the entity type, or a missing file
    """
    if not files:
        raise ProcessingError("no input files configured")
    paths = [Path(f) for f in files]
    invalid = [p.name for p in paths if p.suffix.lower() not in SUPPORTED_SUFFIXES]
    if invalid:
        raise ProcessingError(
            f"Please upload valid Excel or CSV files (.xlsx, .xls, .csv): {', '.join(invalid)}"
        )
    if len(paths) > entity_type.max_files:
        raise ProcessingError(
            f"{entity_type.label} imports support up to {entity_type.max_files} files, got {len(paths)}"
        )
    missing = [str(p) for p in paths if not p.exists()]
    if missing:
        raise ProcessingError(f"input file not found: {', '.join(missing)}")
    return paths


def load_tables(paths: list[Path], keep_na_strings: list[str] | None = None) -> list[SheetData]:
    """Decode every input file, in order."""
    sheets: list[SheetData] = []
    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            try:
                sheet = read_table(path, keep_na_strings=keep_na_strings)
            except TableReadError as e:
                raise ProcessingError(str(e)) from e
            logger.info(f"{path.name}: sheet '{sheet.sheet_name}' {len(sheet.rows)} rows loaded")
            sheets.append(sheet)
            progress.finish_file(sheet.sheet_name, rows=len(sheet.rows))
    return sheets


def run_conversion(config: ConvertConfig, error_log: ErrorLogBuffer | None = None) -> ConversionResult:
    """Execute one configured conversion and write the output workbook.

    Raises:
        ConversionError: converter selection or conversion failed
        ProcessingError: input files, transforms or output writing failed
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    entity = EntityType(config.entity_type)
    primary_name = Path(config.input_files[0]).name if config.input_files else "<none>"

    try:
        converter = get_converter(config.dispatch_system, entity)
        paths = validate_input_files(config.input_files, entity)
        sheets = load_tables(paths, config.keep_na_strings)
        primary, auxiliary = sheets[0], sheets[1:]
        if entity is EntityType.MIXES and config.dispatch_system == "MPAQ" and not auxiliary:
            logger.warning("MPAQ mix conversion expects a materials lookup file as second input")

        output = converter.convert(primary.rows, [s.rows for s in auxiliary])
        for u in output.unresolved:
            error_log.append(
                ErrorRecord.create(
                    file=primary_name,
                    row=u.row_number,
                    error_type=UNRESOLVED_MATERIAL_LOOKUP,
                    message=f"no lookup for material {u.material_name!r} (ID: {u.material_id}); raw ID kept",
                )
            )

        rows_modified = cells_modified = 0
        if config.transforms:
            try:
                transformed = apply_transforms(output.rows, config.transforms)
            except TransformError as e:
                raise ProcessingError(f"transform failed: {e}") from e
            output = dataclasses.replace(output, rows=transformed.rows)
            rows_modified = transformed.rows_modified
            cells_modified = transformed.cells_modified
            logger.info(f"transforms: updated {cells_modified} cells across {rows_modified} rows")

        output_path = _write_output(output, config, entity)
    except ConversionError as e:
        error_log.append(ErrorRecord.create(primary_name, -1, e.error_type, str(e)))
        raise
    finally:
        _flush(error_log)

    end_time = datetime.now(UTC)
    return ConversionResult(
        dispatch_system=config.dispatch_system,
        entity_type=entity.value,
        input_files=len(config.input_files),
        output=output,
        output_path=output_path,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        rows_modified=rows_modified,
        cells_modified=cells_modified,
    )


def _write_output(output: ConversionOutput, config: ConvertConfig, entity: EntityType) -> Path:
    path = Path(config.output_directory) / output_file_name(entity.label, config.customer_prefix)
    try:
        write_table(output.rows, path, output_sheet_name(entity))
    except OSError as e:
        raise ProcessingError(f"cannot write output {path}: {e}") from e
    logger.info(f"output written: {path} ({output.data_rows} rows)")
    return path


def _flush(error_log: ErrorLogBuffer) -> None:
    try:
        written = error_log.flush()
    except OSError as e:
        logger.warning(f"error log flush failed: {e}")
        return
    if written is not None:
        logger.info(f"diagnostics written: {written}")
