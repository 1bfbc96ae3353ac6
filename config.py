"""
config.py — Centralised research-derived constants
===================================================
Every threshold used by the HRV engine lives here so that the rest of the
codebase (and the tests) can import from a single source of truth.

None of these values are runtime-configurable; they come from the HRV
literature (Task Force ESC/NASPE 1996, Shaffer & Ginsberg 2017,
Clifford 2006) and changing them changes the meaning of the output.
"""

import logging

# ─── Logging ─────────────────────────────────────────────────────────────────
LOG_LEVEL: int = logging.INFO

# ─── Artifact Rejection ──────────────────────────────────────────────────────
# Physiological R-R bounds (ms).
#   300 ms  → 200 BPM   (upper heart-rate limit)
#  2000 ms  →  30 BPM   (lower heart-rate limit)
RR_MIN_MS: float = 300.0
RR_MAX_MS: float = 2000.0

# A jump of more than 300 ms between accepted beats is almost always an
# ectopic or missed beat (Clifford 2006).
RR_MAX_DELTA_MS: float = 300.0
RR_MAX_PERCENT_CHANGE: float = 0.20     # relative to the previous accepted beat

# Segments with more than 5 % rejected beats give distorted SDNN/RMSSD.
MAX_ARTIFACT_PERCENTAGE: float = 0.05

# ─── Time Domain ─────────────────────────────────────────────────────────────
MIN_CLEAN_SAMPLES: int = 10             # below this the record is invalid
NN50_THRESHOLD_MS: float = 50.0

# ─── Frequency Domain ────────────────────────────────────────────────────────
# Spectral analysis needs at least 2 minutes of data (5 min recommended).
FREQ_MIN_WINDOW_SECONDS: float = 120.0
FREQ_MIN_SAMPLES: int = 120
SPECTRAL_MIN_SAMPLES: int = 64          # below this band powers are all zero

# Half-open bands [low, high) in Hz
VLF_BAND: tuple[float, float] = (0.003, 0.04)
LF_BAND: tuple[float, float] = (0.04, 0.15)
HF_BAND: tuple[float, float] = (0.15, 0.40)
SPECTRAL_MAX_FREQ_HZ: float = 0.5       # stop accumulating above this

# ─── Confidence ──────────────────────────────────────────────────────────────
CONFIDENCE_LOW_ARTIFACT: float = 0.05
CONFIDENCE_MIN_SAMPLES: int = 30
CONFIDENCE_MEDIUM_WINDOW_SECONDS: float = 30.0
CONFIDENCE_HIGH_WINDOW_SECONDS: float = 60.0
CONFIDENCE_HIGH_ARTIFACT: float = 0.02

# RMSSD interpretation bucket edges (ms), population norms:
#   < 20 very low | 20–30 low | 30–50 normal | 50–100 good | ≥ 100 excellent
RMSSD_VERY_LOW_MS: float = 20.0
RMSSD_LOW_MS: float = 30.0
RMSSD_NORMAL_MS: float = 50.0
RMSSD_GOOD_MS: float = 100.0

# ─── Rolling Window ──────────────────────────────────────────────────────────
# 60 s window with 30 s overlap is the usual compromise for near-real-time HRV.
ROLLING_WINDOW_SECONDS: float = 60.0
ROLLING_OVERLAP_SECONDS: float = 30.0
ROLLING_MIN_SAMPLES: int = 10

# ─── Baseline Comparison ─────────────────────────────────────────────────────
# Percentage deviation edges from a personal baseline.
BASELINE_SIGNIFICANT_PCT: float = 20.0
BASELINE_MINOR_PCT: float = 10.0

# ─── Flow Potential ──────────────────────────────────────────────────────────
# Flow shows an inverted-U relation with sympathetic arousal (Peifer 2014):
# moderate RMSSD and a moderate LF/HF ratio score best.
FLOW_BASE_SCORE: float = 50.0
FLOW_OPTIMAL_RMSSD: tuple[float, float] = (30.0, 60.0)
FLOW_OPTIMAL_LF_HF: tuple[float, float] = (1.0, 2.0)
FLOW_ACCEPTABLE_LF_HF: tuple[float, float] = (0.5, 3.0)   # open interval
FLOW_CONFIDENCE_FACTORS: dict[str, float] = {
    "Low": 0.7,
    "Medium": 0.85,
    "High": 1.0,
}

# ─── Platform Adaptation ─────────────────────────────────────────────────────
# Some providers expose SDNN only.  At rest RMSSD/SDNN is typically 1.3–1.5.
SDNN_TO_RMSSD_RATIO: float = 1.4
