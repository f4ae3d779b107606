"""Monitoring module for log writer statistics"""

from logwriter_module.monitoring.metrics import SinkStats

__all__ = ["SinkStats"]
