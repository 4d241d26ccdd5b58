from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the diagnostic trail.

Every fatal conversion failure and every unresolved material lookup is
recorded as one ErrorRecord and written as a JSON line by
imigrate.logging.error_log. row=-1 marks file-level records where no
source row applies.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured diagnostic record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Input file name the record refers to
        row: 1-based data row number, -1 when unknown / file level
        error_type: Classification in UPPER_SNAKE_CASE (e.g. NO_VALID_ROWS)
        message: Human readable description
    """
    timestamp: str
    file: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # no extra keys: dataclass -> dict -> json
        return json.dumps(asdict(self), ensure_ascii=False)
