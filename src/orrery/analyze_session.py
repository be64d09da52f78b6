"""Analyze a recorded orrery session and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
import math
from collections import Counter
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


POSITIONS_FILENAME = "positions.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
LAST_SESSION_MARKER = "last_session.txt"


def load_positions(path: Path) -> Dict[str, Dict[str, np.ndarray]]:
    """Per-body columns from ``positions.csv``."""

    columns: Dict[str, Dict[str, List[float]]] = {}
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            body = row["body"]
            store = columns.setdefault(body, {})
            for key, value in row.items():
                if key is None or key == "body":
                    continue
                store.setdefault(key, []).append(float(value))
    return {
        body: {key: np.asarray(values) for key, values in data.items()}
        for body, data in columns.items()
    }


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        return [
            {
                "t": float(row["t"]),
                "type": row["type"],
                "body": row.get("body", ""),
                "value": row.get("value", ""),
                "details": row.get("details", ""),
            }
            for row in reader
            if row
        ]


def ensure_fig_dir(session_dir: Path) -> Path:
    fig_dir = session_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def central_body(meta: dict) -> str | None:
    for body in meta.get("bodies", []):
        if body.get("role") == "central":
            return body["name"]
    return None


def radius_deviation(
    positions: Dict[str, Dict[str, np.ndarray]],
    meta: dict,
) -> Dict[str, float]:
    """Largest distance error from each satellite's configured orbit radius."""

    center_name = central_body(meta)
    center = positions.get(center_name or "", {})
    deviations: Dict[str, float] = {}
    for body in meta.get("bodies", []):
        name = body["name"]
        if body.get("role") != "satellite" or name not in positions:
            continue
        track = positions[name]
        cx = center["x"] if "x" in center else np.zeros_like(track["x"])
        cz = center["z"] if "z" in center else np.zeros_like(track["z"])
        distance = np.hypot(track["x"] - cx, track["z"] - cz)
        deviations[name] = float(np.max(np.abs(distance - body["orbit_radius"])))
    return deviations


def summarize_events(events: List[dict]) -> Dict[str, int]:
    return dict(Counter(event["type"] for event in events))


def plot_orbits(fig_dir: Path, positions: Dict[str, Dict[str, np.ndarray]], meta: dict) -> None:
    fig, ax = plt.subplots(figsize=(7, 7))
    center_name = central_body(meta)
    for name, track in positions.items():
        if name == center_name:
            ax.scatter(track["x"][:1], track["z"][:1], color="#ffc440", s=80, label=name.capitalize())
            continue
        ax.plot(track["x"], track["z"], lw=1.0, label=name.capitalize())
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x")
    ax.set_ylabel("z")
    ax.set_title("Orbits (top view)")
    ax.legend(fontsize="small")
    fig.tight_layout()
    fig.savefig(fig_dir / "orbits_xz.png", dpi=150)
    plt.close(fig)


def plot_radius(fig_dir: Path, positions: Dict[str, Dict[str, np.ndarray]], meta: dict) -> None:
    fig, ax = plt.subplots(figsize=(8, 4))
    center_name = central_body(meta)
    for name, track in positions.items():
        if name == center_name:
            continue
        ax.plot(track["t"], np.hypot(track["x"], track["z"]), label=name.capitalize())
    ax.set_xlabel("t [ms]")
    ax.set_ylabel("distance from centre")
    ax.set_title("Orbit radius over time")
    ax.grid(True, alpha=0.3)
    ax.legend(fontsize="small")
    fig.tight_layout()
    fig.savefig(fig_dir / "radius.png", dpi=150)
    plt.close(fig)


def print_summary(
    session_dir: Path,
    positions: Dict[str, Dict[str, np.ndarray]],
    deviations: Dict[str, float],
    event_summary: Dict[str, int],
) -> None:
    print(f"Session: {session_dir.name}")
    print(f" Bodies logged: {', '.join(sorted(positions)) or 'none'}")
    for name, deviation in sorted(deviations.items()):
        status = "ok" if math.isclose(deviation, 0.0, abs_tol=1e-6) else "DRIFT"
        print(f"  {name:<8} max radius deviation {deviation:.3e} ({status})")
    if event_summary:
        print(" Events: " + ", ".join(f"{etype}: {count}" for etype, count in sorted(event_summary.items())))
    else:
        print(" Events: none")


def resolve_session_dir(parser: argparse.ArgumentParser, session_arg: str | None, base_dir: Path) -> Path:
    if session_arg:
        session_path = Path(session_arg)
        if not session_path.is_dir():
            session_path = base_dir / session_arg
    else:
        marker = base_dir / LAST_SESSION_MARKER
        if not marker.exists():
            parser.error(f"No session given and {marker} is missing.")
        session_path = base_dir / marker.read_text(encoding="utf-8").strip()
    if not session_path.is_dir():
        parser.error(f"Session directory not found: {session_path}")
    return session_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded session and create figures.")
    parser.add_argument("session_dir", nargs="?", help="Path or id of a session directory")
    parser.add_argument("--base-dir", type=Path, default=Path("data") / "sessions", help="Session log root")
    args = parser.parse_args(argv)

    session_path = resolve_session_dir(parser, args.session_dir, args.base_dir)
    meta_path = session_path / META_FILENAME
    pos_path = session_path / POSITIONS_FILENAME
    ev_path = session_path / EVENTS_FILENAME
    if not meta_path.exists() or not pos_path.exists() or not ev_path.exists():
        parser.error("Session directory is missing meta/positions/events files.")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)
    positions = load_positions(pos_path)
    events = load_events(ev_path)
    if not positions:
        parser.error("positions.csv is empty, nothing to analyze.")

    fig_dir = ensure_fig_dir(session_path)
    plot_orbits(fig_dir, positions, meta)
    plot_radius(fig_dir, positions, meta)
    print_summary(session_path, positions, radius_deviation(positions, meta), summarize_events(events))


if __name__ == "__main__":
    main()
