"""Fragment validation: precheck and orchestration.

Python 3.13+.
"""

from .orchestrator import ContentPipeline, Orchestrator, Report, Translator
from .precheck import check_entry_point, check_not_empty

__all__ = [
    "ContentPipeline",
    "Orchestrator",
    "Report",
    "Translator",
    "check_entry_point",
    "check_not_empty",
]
