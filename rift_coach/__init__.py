"""rift-coach: League of Legends performance analysis and coaching sessions."""

__version__ = "0.1.0"
