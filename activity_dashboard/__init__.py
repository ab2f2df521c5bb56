"""Personal activity-tracking dashboard."""
