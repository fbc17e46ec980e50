# File: classdesk_app/modules/srs/config.py


class SrsDefaultConfig:
    """Default configuration for the SRS module.

    The review intervals themselves are fixed policy and live in
    ``logics.scheduler.REVIEW_INTERVALS``.
    """
    # Show the expected answer after a wrong submission
    SRS_REVEAL_ANSWER_ON_WRONG = True
