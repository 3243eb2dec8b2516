"""Ready-made presentation sinks"""

from .console_sink import ConsoleSink
from .recording_sink import RecordingSink

__all__ = [
    'ConsoleSink',
    'RecordingSink',
]
