"""JSONL trace logging for headless invocations.

Each record is one JSON object per line::

    {"timestamp": 1718000000.0, "run_id": "1a2b3c4d", "type": "invocation_start",
     "mode": "agent", "model": null, "prompt_chars": 1204}

Record types written by the core:

* ``invocation_start`` / ``invocation_complete`` — orchestrator
* ``backend_start`` / ``backend_complete`` — every backend
* ``agent_stream_complete`` — agent backend, with the ignored event count
* ``agent_timeout`` — agent backend, when the deadline fires

Diagnostic logging goes through the standard ``logging`` module; traces
are for machine-readable run records.
"""

import json
import time
from pathlib import Path
from dataclasses import dataclass, field
from typing import TextIO, Any


@dataclass
class TraceLogger:
    """Writes invocation traces to a JSONL file."""

    output_path: Path
    run_id: str
    _file: TextIO = field(init=False, repr=False)
    _closed: bool = field(init=False, default=False)

    def __post_init__(self):
        self.output_path = Path(self.output_path)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.output_path, "a")

    def log(self, event_type: str, **data: Any) -> None:
        """Log a core-generated event."""
        record = {
            "timestamp": time.time(),
            "run_id": self.run_id,
            "type": event_type,
            **data,
        }
        self._write(record)

    def _write(self, record: dict) -> None:
        if self._closed:
            return
        self._file.write(json.dumps(record, default=str) + "\n")
        self._file.flush()

    def close(self) -> None:
        if not self._closed:
            self._file.close()
            self._closed = True

    def __enter__(self) -> "TraceLogger":
        return self

    def __exit__(self, *args) -> None:
        self.close()
