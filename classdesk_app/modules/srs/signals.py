from blinker import Namespace

# Define a signal namespace for SRS practice
_signals = Namespace()

# Signal emitted after an answer is graded and saved to DB
# Arguments:
# - sender: The SrsService instance
# - task_id: int
# - item_id: int
# - correct: bool
# - streak: int
# - next_due_at: datetime
answer_graded = _signals.signal('answer-graded')

# Signal emitted when a submission moves the task's progress or status
# Arguments:
# - sender: The SrsService instance
# - task_id: int
# - progress_pct: int
# - status: str ('in_progress' or 'completed')
progress_changed = _signals.signal('progress-changed')
