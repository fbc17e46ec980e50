from .schemas import ProgressSnapshot
from .services.srs_service import SrsService


class SrsInterface:
    """Public API of the SRS module for other modules."""

    @staticmethod
    def get_progress(task_id: int) -> ProgressSnapshot:
        """Mastery progress of an SRS task, recomputed from the stored review state."""
        return SrsService().get_progress(task_id)
