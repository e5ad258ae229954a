from .algorithms import Algorithm
from .frames import FrameEmitter, Highlight, HighlightState, Step
from .pacing import delay_for
from .session import Mode, SessionContext, SessionController, SessionStatus, parse_values
from .supervisor import Run, RunState, RunSupervisor

__version__ = "1.0.0"
