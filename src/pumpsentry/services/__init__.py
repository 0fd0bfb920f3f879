"""Service layer for position tracking and pump alerts."""
