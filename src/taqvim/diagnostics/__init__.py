"""Diagnostics package.

- pretty_month, round_trip: always available, stdlib only
- hijri_drift: optional (requires the diagnostics extras: numpy, matplotlib)
"""

__all__ = ["pretty_month", "round_trip", "hijri_drift"]
