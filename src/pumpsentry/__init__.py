"""PumpSentry: real-time pump scoring, simulated positions and pump alerts."""

__version__ = "1.0.0"
