"""Presentation of pipeline fields: display buffers, PNG figures and export.

The interactive window lives in :mod:`imgfreq.visualization.viewer` and is
imported on demand, since it pulls in pyplot.
"""

from .presentation import (
    PANELS,
    BufferSink,
    PresentationSink,
    export_output,
    profile_polyline,
    to_display_buffer,
)
from .plotter import FrequencyPlotter

__all__ = [
    'PANELS',
    'BufferSink',
    'PresentationSink',
    'export_output',
    'profile_polyline',
    'to_display_buffer',
    'FrequencyPlotter',
]
