"""City weather core: fetch orchestration, forecast reduction and favorites."""

__version__ = "0.1.0"
