"""
Application use cases for the signal monitor
"""

from .channel_monitoring import ChannelMonitoringUseCase

__all__ = [
    'ChannelMonitoringUseCase',
]
