"""CASK

A social cataloguing backend for whisky bottles. Users record tastings,
tag flavors, earn badges, and browse bottles and the entities behind them,
enriched with retail pricing pushed by scraper jobs.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
