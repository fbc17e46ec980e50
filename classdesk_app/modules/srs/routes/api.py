from flask import jsonify

from classdesk_app.core.error_handlers import load_json_body, success_response

from .. import srs_bp
from ..schemas import AnswerSubmissionSchema, SubmissionDTO
from ..services.srs_service import SrsService


@srs_bp.route('/tasks/<int:task_id>/srs', methods=['GET'])
def next_question(task_id):
    """
    Next due question of an SRS task.
    Output: {"question": {...} | null, "progress": {...}, "done": bool, "waiting": bool, ...}
    """
    view = SrsService().get_session_view(task_id)
    return jsonify(success_response(view.to_dict()))


@srs_bp.route('/tasks/<int:task_id>/srs/answer', methods=['POST'])
def submit_answer(task_id):
    """
    Grade an answer.
    Input: {
        "item_id": int,
        "selected_option": int (mcq),
        "response_text": str (short answer)
    }
    """
    payload = load_json_body(AnswerSubmissionSchema(), 'Invalid answer submission')

    submission = SubmissionDTO(
        selected_option=payload.get('selected_option'),
        response_text=payload.get('response_text'),
    )
    outcome = SrsService().submit_answer(task_id, payload['item_id'], submission)
    return jsonify(success_response(outcome.to_dict()))
