"""
Duty timeline app.

Builds the driver's daily log sheet (24-hour duty status timelines,
per-status totals and the log sheet chart) from planned route events.
"""
