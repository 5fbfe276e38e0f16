"""Trigger-driven stage scheduler.

Stages run in a fixed order. For a trigger ``t`` a stage recomputes when
``t <= stage.level`` and ``t`` is not one of its skip triggers; it re-renders
its panel when it recomputed or when ``t`` is one of its render triggers.

==========  ==============  ===========================  ==============
stage       level           render-only triggers         skips
==========  ==============  ===========================  ==============
source      IMAGE_SOURCE    -                            -
window      IMAGE_WINDOW    -                            -
spectrum    IMAGE_WINDOW    ZOOM, AXES_CHANGE,           -
                            SHOW_PROFILE
filter      FILTER_CHANGE   ZOOM, AXES_CHANGE            -
output      FILTER_SET      -                            FILTER_CHANGE
==========  ==============  ===========================  ==============

The output stage skips FILTER_CHANGE so dragging a cutoff only redraws the
filter; the inverse transform runs once the drag is released (FILTER_SET).
"""

from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional
import logging

from imgfreq.pipeline import stages
from imgfreq.pipeline.triggers import RENDER_ONLY, Trigger

__all__ = ['Stage', 'STAGES', 'run_pipeline']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stage:
    name: str
    level: Trigger
    compute: Callable
    render_triggers: FrozenSet[Trigger] = frozenset()
    skip_triggers: FrozenSet[Trigger] = frozenset()
    render: Optional[Callable] = None
    check: Optional[Callable] = None

    def should_compute(self, trigger: Trigger) -> bool:
        return trigger <= self.level and trigger not in self.skip_triggers

    def should_render(self, trigger: Trigger, computed: bool) -> bool:
        return self.render is not None and (computed or trigger in self.render_triggers)


STAGES = (
    Stage(
        name="source",
        level=Trigger.IMAGE_SOURCE,
        compute=stages.compute_source,
        check=stages.check_source,
    ),
    Stage(
        name="window",
        level=Trigger.IMAGE_WINDOW,
        compute=stages.compute_window,
        render=stages.render_window,
        check=stages.check_window,
    ),
    Stage(
        name="spectrum",
        level=Trigger.IMAGE_WINDOW,
        compute=stages.compute_spectrum,
        render_triggers=RENDER_ONLY,
        render=stages.render_spectrum,
        check=stages.check_spectrum,
    ),
    Stage(
        name="filter",
        level=Trigger.FILTER_CHANGE,
        compute=stages.compute_filter,
        render_triggers=frozenset({Trigger.ZOOM, Trigger.AXES_CHANGE}),
        render=stages.render_filter,
        check=stages.check_filter,
    ),
    Stage(
        name="output",
        level=Trigger.FILTER_SET,
        compute=stages.compute_output,
        skip_triggers=frozenset({Trigger.FILTER_CHANGE}),
        render=stages.render_output,
        check=stages.check_output,
    ),
)


def run_pipeline(state, trigger: Trigger, controls, provider, sink=None, config=None,
                 stage_list=STAGES) -> List[str]:
    """Bring the state up to date for one trigger.

    Parameters
    ----------
    state : PipelineState
        Mutated in place by the stages that recompute.
    trigger : Trigger
        What changed.
    controls : Controls
        Current control values.
    provider : ImageSourceProvider
        Used by the source stage only.
    sink : PresentationSink, optional
        Receives re-rendered panels. Rendering is skipped when None.
    config : InternalConfig
        Runtime configuration.

    Returns
    -------
    list of str
        Names of the stages that recomputed, in order.

    Raises
    ------
    AcquisitionFailure
        From the source stage; no field has been modified at that point.
    ContractViolation
        When a stage produces fields that break its contract.
    """
    if config is None:
        raise ValueError("run_pipeline requires an InternalConfig")

    trigger = Trigger(trigger)
    logger.debug("Pipeline run: %s", trigger.name)

    computed = []
    for stage in stage_list:
        did_compute = stage.should_compute(trigger)
        if did_compute:
            stage.compute(state, controls, provider, config)
            if stage.check is not None:
                stage.check(state, config)
            computed.append(stage.name)

        if sink is not None and stage.should_render(trigger, did_compute):
            stage.render(state, controls, sink, config)

    logger.debug("Pipeline run %s recomputed: %s", trigger.name, ", ".join(computed) or "nothing")
    return computed
