"""Diagnostics package.

- round_trip, new_years_table: always available, stdlib only
- new_year_scatter: optional (requires the diagnostics extra: numpy, matplotlib)
"""

__all__ = ["round_trip", "new_years_table", "new_year_scatter"]
