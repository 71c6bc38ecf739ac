"""Message types, motion controllers and sensor processing for a small differential-drive robot."""

__version__ = "0.1.0"