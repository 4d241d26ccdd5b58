from __future__ import annotations

from ..models.conversion_result import ConversionResult

"""SUMMARY line rendering."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ConversionResult) -> str:
    """Render the SUMMARY line of a run.

    Format:
    SUMMARY system={system} entity={entity} files={n} records={valid}/{total}
    rows={rows} unresolved={k} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> from imigrate.models.conversion_result import ConversionOutput
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> out = ConversionOutput(rows=[["h"], [1], [2]], source_records=3, valid_records=1)
        >>> result = ConversionResult("MPAQ", "mixes", 2, out, None, t, t, 2.0)
        >>> render_summary_line(result)
        'SUMMARY system=MPAQ entity=mixes files=2 records=1/3 rows=2 unresolved=0 elapsed_sec=2'
    """
    out = result.output
    return (
        f"SUMMARY system={result.dispatch_system} "
        f"entity={result.entity_type} "
        f"files={result.input_files} "
        f"records={out.valid_records}/{out.source_records} "
        f"rows={out.data_rows} "
        f"unresolved={len(out.unresolved)} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
