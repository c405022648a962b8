from enum import Enum

from gpu_blacklist.models import DiagnosticKind


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


DIAGNOSTIC_STYLE = {
    DiagnosticKind.ENTRY_DEGRADED: UIStyle.YELLOW.value,
    DiagnosticKind.UNKNOWN_FEATURE: UIStyle.CYAN.value,
    DiagnosticKind.EXCEPTION_DROPPED: UIStyle.MAGENTA.value,
    DiagnosticKind.CRITERION_INVALID: UIStyle.RED.value,
}
