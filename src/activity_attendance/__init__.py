"""Activity attendance validation engine.

Organized by feature modules (locations, timing, attendance, thresholds, ...)
with a thin Flask JSON layer on top of pure, synchronous rules.
"""
