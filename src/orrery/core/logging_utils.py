"""Session recording scoped to the orrery package."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence


class SessionLogger:
    """Buffered logger that stores body positions and input events to CSV files."""

    POSITIONS_HEADER = ["t", "body", "x", "y", "z", "rotation", "speed"]
    EVENTS_HEADER = ["t", "type", "body", "value", "details"]
    LAST_SESSION_MARKER = "last_session.txt"

    def __init__(
        self,
        root_dir: str | Path = "data/sessions",
        session_id: Optional[str] = None,
        *,
        positions_flush_threshold: int = 200,
        events_flush_threshold: int = 20,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        def make_candidate(suffix: Optional[int] = None) -> str:
            base = session_id or f"{timestamp}_session"
            if suffix is None:
                return base
            if session_id:
                return f"{session_id}_{suffix}"
            return f"{base}_{suffix:02d}"

        candidate_id = make_candidate()
        suffix = 1
        while (self.root_dir / candidate_id).exists():
            candidate_id = make_candidate(suffix)
            suffix += 1

        self.session_id = candidate_id
        self.session_dir = self.root_dir / self.session_id
        self.session_dir.mkdir(parents=True, exist_ok=False)

        self.positions_path = self.session_dir / "positions.csv"
        self.events_path = self.session_dir / "events.csv"
        self.meta_path = self.session_dir / "meta.json"

        self._pos_file = self.positions_path.open("w", newline="")
        self._pos_file.write(",".join(self.POSITIONS_HEADER) + "\n")
        self._pos_file.flush()
        self._ev_file = self.events_path.open("w", newline="")
        self._ev_file.write(",".join(self.EVENTS_HEADER) + "\n")
        self._ev_file.flush()

        self._pos_buffer: list[str] = []
        self._ev_buffer: list[str] = []
        self._pos_threshold = max(1, positions_flush_threshold)
        self._ev_threshold = max(1, events_flush_threshold)
        self._closed = False

        marker = self.root_dir / self.LAST_SESSION_MARKER
        marker.write_text(self.session_id, encoding="utf-8")

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_position(self, values: Sequence[object]) -> None:
        self._pos_buffer.append(",".join(self._format_value(v) for v in values))
        if len(self._pos_buffer) >= self._pos_threshold:
            self._flush_positions()

    def log_event(
        self,
        t: float,
        event_type: str,
        body: str = "",
        value: object = "",
        details: str = "",
    ) -> None:
        row = (t, event_type, body, value, details.replace(",", ";"))
        self._ev_buffer.append(",".join(self._format_value(v) for v in row))
        if len(self._ev_buffer) >= self._ev_threshold:
            self._flush_events()

    def close(self) -> None:
        if self._closed:
            return
        self._flush_positions()
        self._flush_events()
        self._pos_file.close()
        self._ev_file.close()
        self._closed = True

    def _flush_positions(self) -> None:
        if self._pos_buffer:
            self._pos_file.write("\n".join(self._pos_buffer) + "\n")
            self._pos_file.flush()
            self._pos_buffer.clear()

    def _flush_events(self) -> None:
        if self._ev_buffer:
            self._ev_file.write("\n".join(self._ev_buffer) + "\n")
            self._ev_file.flush()
            self._ev_buffer.clear()

    @staticmethod
    def _format_value(value: object) -> str:
        if isinstance(value, bool):
            return str(int(value))
        if isinstance(value, (int, float)):
            return f"{value:.10g}"
        return str(value)

    def __enter__(self) -> "SessionLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["SessionLogger"]
