"""Scheduling algorithms and tournament controllers."""
