"""Pipeline modules.

- triggers: what changed, and therefore which stages rerun
- state: fields shared by the stages
- controls: interactive control values, cutoff correction
- stages / scheduler: stage functions and the trigger-driven runner
- session: control actions mapped to triggers, runs serialised by a lock
"""

from imgfreq.pipeline.triggers import Trigger
from imgfreq.pipeline.state import PipelineState
from imgfreq.pipeline.controls import Controls, adjust_cutoffs
from imgfreq.pipeline.scheduler import Stage, STAGES, run_pipeline
from imgfreq.pipeline.session import ViewerSession

__all__ = [
    "Trigger",
    "PipelineState",
    "Controls",
    "adjust_cutoffs",
    "Stage",
    "STAGES",
    "run_pipeline",
    "ViewerSession",
]
