"""
features/spectral.py — Frequency-domain HRV (VLF / LF / HF power)
====================================================================
Estimates how R-R variability is distributed across the standard
Task Force (1996) frequency bands:

    VLF  0.003–0.04 Hz   thermoregulation / hormonal
    LF   0.04–0.15 Hz    sympathetic + parasympathetic
    HF   0.15–0.40 Hz    parasympathetic (respiratory sinus arrhythmia)

Algorithm
---------
1. Detrend: subtract the mean R-R interval.
2. Apply a symmetric Hanning window,
   ``w[i] = 0.5 · (1 − cos(2π·i / (N−1)))``.
3. Power at bin k is ``|X_k|² / N²`` where ``X_k`` is the DFT of the
   windowed series.  Bins ``k = 1 … N//2 − 1`` are used; bin frequency is
   ``k · fs / N`` with ``fs = 1000 / mean_RR`` Hz.
4. Bin powers are summed into half-open bands.  Accumulation stops at
   the first bin above SPECTRAL_MAX_FREQ_HZ; total power covers every
   accumulated bin, not just the three named bands.

Sampling-rate approximation
---------------------------
The R-R series is inherently unevenly sampled (one sample per beat).  We
treat it as evenly sampled at the mean heart rate, which is a known
simplification in the HRV literature.  It is kept deliberately: switching
to interpolation or Lomb-Scargle would change every output value.

The DFT is computed with `numpy.fft.rfft`; it is numerically equivalent to
the direct per-bin sum within floating-point tolerance.
"""

from typing import Optional, Sequence

import numpy as np
from scipy.signal import windows

from config import (
    HF_BAND,
    LF_BAND,
    SPECTRAL_MAX_FREQ_HZ,
    SPECTRAL_MIN_SAMPLES,
    VLF_BAND,
)
from model.schemas import SpectralMetrics
from utils.logger import get_logger

logger = get_logger("features.spectral")


def hanning_window(signal: np.ndarray) -> np.ndarray:
    """Multiply `signal` by a symmetric Hanning window of the same length."""
    return signal * windows.hann(signal.size, sym=True)


def _band_sum(power: np.ndarray, freqs: np.ndarray, band: tuple[float, float]) -> float:
    low, high = band
    mask = (freqs >= low) & (freqs < high)
    return float(power[mask].sum())


def compute_band_powers(
    rr_intervals: Sequence[float],
    sample_rate: float,
) -> tuple[float, float, float, float]:
    """
    Integrate DFT power of an R-R series into the VLF, LF and HF bands.

    Parameters
    ----------
    rr_intervals : Sequence[float]   Cleaned R-R intervals (ms).
    sample_rate  : float             Pseudo sampling rate in Hz.

    Returns
    -------
    vlf, lf, hf, total : float
        Band powers in ms².  All zero when fewer than
        SPECTRAL_MIN_SAMPLES intervals are supplied.
    """
    rr_ms = np.asarray(rr_intervals, dtype=np.float64)
    n = rr_ms.size
    if n < SPECTRAL_MIN_SAMPLES:
        logger.debug("Only %d intervals — need %d for spectral power.", n, SPECTRAL_MIN_SAMPLES)
        return 0.0, 0.0, 0.0, 0.0

    windowed = hanning_window(rr_ms - rr_ms.mean())

    spectrum = np.fft.rfft(windowed)
    bins = np.arange(1, n // 2)
    freqs = bins * (sample_rate / n)
    power = np.abs(spectrum[bins]) ** 2 / float(n * n)

    # Frequencies increase with k, so a mask is the same as stopping at
    # the first bin above the limit.
    in_range = freqs <= SPECTRAL_MAX_FREQ_HZ
    freqs = freqs[in_range]
    power = power[in_range]

    vlf = _band_sum(power, freqs, VLF_BAND)
    lf = _band_sum(power, freqs, LF_BAND)
    hf = _band_sum(power, freqs, HF_BAND)
    total = float(power.sum())

    logger.debug(
        "Spectral power — VLF=%.2f, LF=%.2f, HF=%.2f, total=%.2f ms² (%d bins, fs=%.3f Hz)",
        vlf, lf, hf, total, freqs.size, sample_rate,
    )
    return vlf, lf, hf, total


def compute_spectral_metrics(
    rr_intervals: Sequence[float],
    mean_rr: Optional[float] = None,
) -> SpectralMetrics:
    """
    Build the full frequency-domain group for a cleaned R-R series.

    ``lf_hf_ratio`` is only set when HF power is positive; normalised units
    only when ``total − vlf`` is positive.
    """
    if mean_rr is None:
        mean_rr = float(np.mean(rr_intervals))

    vlf, lf, hf, total = compute_band_powers(rr_intervals, sample_rate=1000.0 / mean_rr)

    lf_hf_ratio = lf / hf if hf > 0 else None

    lf_nu = hf_nu = None
    denominator = total - vlf
    if denominator > 0:
        lf_nu = lf / denominator * 100.0
        hf_nu = hf / denominator * 100.0

    return SpectralMetrics(
        vlf_power=vlf,
        lf_power=lf,
        hf_power=hf,
        total_power=total,
        lf_hf_ratio=lf_hf_ratio,
        lf_nu=lf_nu,
        hf_nu=hf_nu,
    )
