"""
Stage cursor for stepping through a computed timeline.

The engine returns immutable data; which stage a viewer is looking at
is presentation state and lives here, outside the engine:

    idle --start()--> showing(0) --advance()--> showing(i) ... --> complete
      ^                                                               |
      +------------------------------ stop() -------------------------+

Transitions happen only on explicit start/advance/stop calls. Reaching
the last stage moves the cursor to 'complete'; advancing from there (or
from idle) does nothing.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

IDLE = "idle"
SHOWING = "showing"
COMPLETE = "complete"


class StageTimeline:
    """Cursor over the stages of one StellarProperties."""

    def __init__(self):
        self.state = IDLE
        self.properties = None
        self.index = 0

    def start(self, stellar_properties):
        """Begin at the first stage of the given star."""
        self.properties = stellar_properties
        self.index = 0
        self.state = COMPLETE if len(stellar_properties.stages) == 1 else SHOWING
        return self.current_stage

    def advance(self):
        """Step to the next stage. Returns the current stage (or None when idle)."""
        if self.state != SHOWING:
            return self.current_stage
        self.index += 1
        if self.index == len(self.properties.stages) - 1:
            self.state = COMPLETE
        return self.current_stage

    def stop(self):
        """Drop the star and return to idle."""
        self.state = IDLE
        self.properties = None
        self.index = 0

    @property
    def current_stage(self):
        if self.properties is None:
            return None
        return self.properties.stages[self.index]

    @property
    def is_complete(self):
        return self.state == COMPLETE

    def to_dict(self):
        stage = self.current_stage
        return {
            "state": self.state,
            "index": self.index if stage is not None else None,
            "stage": stage.name if stage is not None else None,
            "stage_count": len(self.properties.stages) if self.properties else 0,
        }
