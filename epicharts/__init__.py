"""Chart-data preparation for weekly prevalence surveillance series.

This package contains:
- calendar helpers (day ranges, epiweek bucketing, week grids)
- series normalization (gap filling) and long -> wide pivoting
- value scaling for nested per-series data points
- presentation parameters (x-axis tick decimation, accessible palettes)
- a composite payload builder (JSON-friendly dicts for chart components)
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
