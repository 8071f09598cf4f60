"""
Application layer for the signal monitor
"""

from signal_monitor.application.use_cases.channel_monitoring import ChannelMonitoringUseCase

__all__ = [
    "ChannelMonitoringUseCase",
]
