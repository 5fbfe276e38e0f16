"""Pipeline triggers.

A trigger names the earliest stage whose inputs changed. Every stage at or
after that level is recomputed; stages before it are reused. The last three
members are render-only: they recompute nothing and only refresh the panels
that show them.
"""

from enum import IntEnum

__all__ = ['Trigger', 'RENDER_ONLY']


class Trigger(IntEnum):
    INIT = 0
    IMAGE_SOURCE = 1
    IMAGE_WINDOW = 2
    FILTER_CHANGE = 3   # cutoff slider moving
    FILTER_SET = 4      # cutoff slider released
    ZOOM = 5
    AXES_CHANGE = 6
    SHOW_PROFILE = 7


RENDER_ONLY = frozenset({Trigger.ZOOM, Trigger.AXES_CHANGE, Trigger.SHOW_PROFILE})
