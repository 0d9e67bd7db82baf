from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when series data or figure state cannot be rendered."""
