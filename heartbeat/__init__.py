"""Host resource heartbeat monitor with rolling-baseline anomaly detection."""

__version__ = "0.1.0"
