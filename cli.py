#!/usr/bin/env python3
"""
cli.py — Command-line HRV report
==================================
Runs the HRV engine on a file of R-R intervals and prints the result.

Usage:
    hrv-metrics recording.txt
    hrv-metrics recording.csv --rolling --window-seconds 60 --overlap-seconds 30
    hrv-metrics recording.txt --baseline 42 --json
    cat recording.txt | hrv-metrics -

Input format
------------
One record per line.  Either a bare R-R interval in milliseconds, or
``timestamp,rr_ms`` where the timestamp is ISO-8601 or epoch seconds
(ISO values without an offset are taken as UTC).
Blank lines and lines starting with ``#`` are ignored.  When no
timestamps are given they are synthesised from the cumulative intervals.

⚠️  DISCLAIMER: All values are WELLNESS ESTIMATES, not medical readings.
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

from config import ROLLING_OVERLAP_SECONDS, ROLLING_WINDOW_SECONDS
from engine.metrics import calculate_metrics
from engine.rolling import calculate_rolling_hrv, timestamps_from_intervals
from model.baseline import compare_to_baseline
from model.flow import evaluate_flow_potential
from utils.logger import get_logger, set_level

logger = get_logger("cli")


def _parse_timestamp(text: str) -> datetime:
    """Epoch seconds or ISO-8601; a timestamp without an offset is read as UTC."""
    try:
        return datetime.fromtimestamp(float(text), tz=timezone.utc)
    except ValueError:
        pass
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def read_intervals(stream: TextIO) -> tuple[list[float], Optional[list[datetime]]]:
    """
    Parse R-R records from a text stream.

    Returns the intervals and, if every line carried one, the timestamps.
    Raises ValueError on a malformed line or a mix of both formats.
    """
    intervals: list[float] = []
    timestamps: list[datetime] = []

    for line_no, raw in enumerate(stream, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = [p.strip() for p in line.split(",")]
        try:
            if len(parts) == 1:
                intervals.append(float(parts[0]))
            elif len(parts) == 2:
                timestamps.append(_parse_timestamp(parts[0]))
                intervals.append(float(parts[1]))
            else:
                raise ValueError(f"expected 1 or 2 fields, got {len(parts)}")
        except ValueError as e:
            raise ValueError(f"line {line_no}: {e}") from e

    if timestamps and len(timestamps) != len(intervals):
        raise ValueError("either every line or no line may carry a timestamp")

    return intervals, (timestamps or None)


def pretty_print(label: str, value, unit: str = "") -> None:
    """Colourised terminal output."""
    print(f"  \033[1;36m{label:<28}\033[0m \033[1;33m{value}\033[0m {unit}")


def _fmt(value: Optional[float], spec: str = ".2f") -> str:
    return "N/A" if value is None else format(value, spec)


def _print_report(metrics, baseline: Optional[float]) -> None:
    print("=" * 60)
    print("  HRV REPORT")
    print("=" * 60)

    if not metrics.is_valid and metrics.sample_count == 0:
        print("    ⚠️  Insufficient clean beats for HRV calculation.")
        pretty_print("Artifacts rejected", metrics.artifact_count)
        return

    print("\n  ── Time Domain ──")
    pretty_print("RMSSD", _fmt(metrics.rmssd), "ms")
    pretty_print("SDNN", _fmt(metrics.sdnn), "ms")
    pretty_print("SDSD", _fmt(metrics.sdsd), "ms")
    pretty_print("pNN50", _fmt(metrics.pnn50, ".1f"), f"% (NN50={metrics.nn50})")
    pretty_print("Mean RR", _fmt(metrics.mean_rr, ".1f"), "ms")
    pretty_print("Mean HR", _fmt(metrics.mean_hr, ".1f"), "BPM")
    pretty_print("Interpretation", metrics.rmssd_interpretation.value,
                 f"— {metrics.rmssd_interpretation.description}")

    print("\n  ── Frequency Domain ──")
    if metrics.has_spectral:
        pretty_print("VLF power", _fmt(metrics.vlf_power), "ms²")
        pretty_print("LF power", _fmt(metrics.lf_power), "ms²")
        pretty_print("HF power", _fmt(metrics.hf_power), "ms²")
        pretty_print("Total power", _fmt(metrics.total_power), "ms²")
        pretty_print("LF/HF ratio", _fmt(metrics.lf_hf_ratio))
        pretty_print("LF / HF (n.u.)", f"{_fmt(metrics.lf_nu, '.1f')} / {_fmt(metrics.hf_nu, '.1f')}")
    else:
        print("    Not computed (needs ≥ 120 s and ≥ 120 clean beats).")

    print("\n  ── Quality ──")
    pretty_print("Clean beats", metrics.sample_count)
    pretty_print("Artifacts", metrics.artifact_count,
                 f"({metrics.artifact_percentage * 100:.1f}%)")
    pretty_print("Window", _fmt(metrics.window_duration_seconds, ".0f"), "s")
    pretty_print("Confidence", metrics.confidence_level.value,
                 f"— {metrics.confidence_level.description}")
    pretty_print("Valid", "yes" if metrics.is_valid else "no")

    flow = evaluate_flow_potential(metrics, baseline_rmssd=baseline)
    print("\n  ── Flow Potential (ESTIMATED) ──")
    pretty_print("Score", flow.score, "/ 100")
    print(f"    {flow.interpretation}. {flow.recommendation}.")

    if baseline is not None:
        deviation, interpretation = compare_to_baseline(metrics.rmssd, baseline)
        print("\n  ── Baseline ──")
        pretty_print("Deviation", f"{deviation:+.1f}", "%")
        print(f"    {interpretation}")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="HRV metrics from R-R intervals")
    parser.add_argument("path", help="File of R-R intervals (ms), or '-' for stdin")
    parser.add_argument("--window", type=float, default=None,
                        help="Window duration in seconds (default: sum of intervals)")
    parser.add_argument("--rolling", action="store_true",
                        help="Emit a rolling-window time series instead of one record")
    parser.add_argument("--window-seconds", type=float, default=ROLLING_WINDOW_SECONDS)
    parser.add_argument("--overlap-seconds", type=float, default=ROLLING_OVERLAP_SECONDS)
    parser.add_argument("--baseline", type=float, default=None,
                        help="Personal resting RMSSD baseline (ms)")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        set_level(logging.DEBUG)

    try:
        if args.path == "-":
            intervals, timestamps = read_intervals(sys.stdin)
        else:
            with open(args.path, encoding="utf-8") as fh:
                intervals, timestamps = read_intervals(fh)
    except (OSError, ValueError) as e:
        print(f"ERROR: cannot read intervals: {e}", file=sys.stderr)
        return 1

    logger.debug("Read %d intervals from %s", len(intervals), args.path)

    if args.rolling:
        if timestamps is None:
            timestamps = timestamps_from_intervals(intervals, datetime.now(timezone.utc))
        try:
            points = calculate_rolling_hrv(
                intervals, timestamps,
                window_seconds=args.window_seconds,
                overlap_seconds=args.overlap_seconds,
            )
        except ValueError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1

        if args.json:
            print(json.dumps([p.model_dump(mode="json") for p in points], indent=2))
        else:
            print(f"  {'window end':<34}{'RMSSD (ms)':>12}{'HR (BPM)':>10}  valid")
            for p in points:
                print(f"  {p.timestamp.isoformat():<34}{p.rmssd:>12.1f}{p.mean_hr:>10.1f}  "
                      f"{'yes' if p.is_valid else 'no'}")
        return 0

    window = args.window if args.window is not None else sum(intervals) / 1000.0
    metrics = calculate_metrics(intervals, window)

    if args.json:
        payload = metrics.model_dump(mode="json")
        payload["summary"] = metrics.summary
        if args.baseline is not None:
            payload["flow"] = evaluate_flow_potential(
                metrics, baseline_rmssd=args.baseline,
            ).model_dump(mode="json")
        print(json.dumps(payload, indent=2))
    else:
        _print_report(metrics, args.baseline)
    return 0


if __name__ == "__main__":
    sys.exit(main())
