"""quakefeed - windowing engine for a live seismic event feed."""

__version__ = "1.0.0"
