"""
Spelling Review Flask Routes
============================
API endpoints for one-shot spell checks and interactive correction sessions.

v1.0.0: Initial implementation
"""

import time
from functools import wraps
from flask import Blueprint, request, jsonify, g

from config_logging import get_logger, SpellReviewError, ValidationError

from .corrector import replace_word
from .models import SpellingError
from .session import get_session_manager

logger = get_logger('spell_review')

# Create blueprint
spelling_blueprint = Blueprint('spell_review', __name__)


# =============================================================================
# STANDARDIZED ERROR HANDLING DECORATOR
# =============================================================================

def _error_response(code: str, message: str, status: int, details=None):
    body = {
        'success': False,
        'error': {
            'code': code,
            'message': message,
            'correlation_id': getattr(g, 'correlation_id', 'unknown')
        }
    }
    if details:
        body['error']['details'] = details
    return jsonify(body), status


def handle_spelling_errors(f):
    """
    Decorator for standardized API error handling in spelling routes.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        start_time = time.time()
        try:
            result = f(*args, **kwargs)

            elapsed = time.time() - start_time
            if elapsed > 2.0:
                logger.warning(f"Slow spelling API call: {f.__name__} took {elapsed:.1f}s")

            return result

        except SpellReviewError as e:
            if e.status_code >= 500:
                logger.error(f"{e.code} in {f.__name__}: {e}")
            else:
                logger.warning(f"{e.code} in {f.__name__}: {e}")
            return _error_response(e.code, e.message, e.status_code, e.details)
        except Exception as e:
            logger.exception(f"Unexpected error in {f.__name__}: {e}")
            return _error_response('INTERNAL_ERROR', 'An unexpected error occurred', 500)

    return decorated


# =============================================================================
# REQUEST HELPERS
# =============================================================================

def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValidationError(f"'{key}' must be a string", field=key)
    return value


def _parse_error(data: dict) -> SpellingError:
    raw = data.get('error')
    if not isinstance(raw, dict):
        raise ValidationError("'error' must be an object", field='error')
    try:
        return SpellingError.from_dict(raw)
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Malformed spelling error: {e}", field='error')


# =============================================================================
# ONE-SHOT ENDPOINTS
# =============================================================================

@spelling_blueprint.route('/check', methods=['POST'])
@handle_spelling_errors
def check_text():
    """
    Check text for spelling errors.

    Request body:
        { text: str }

    Returns:
        { success: true, count: int, errors: [{word, startIndex, endIndex, suggestions}] }
    """
    text = _require_str(_json_body(), 'text')
    errors = get_session_manager().corrector.check(text)
    logger.info(f"Checked {len(text)} chars: {len(errors)} possible misspellings")
    return jsonify({
        'success': True,
        'count': len(errors),
        'errors': [e.to_dict() for e in errors]
    })


@spelling_blueprint.route('/replace', methods=['POST'])
@handle_spelling_errors
def replace_text():
    """
    Apply one correction to text.

    Request body:
        { text: str, error: {word, startIndex, endIndex}, replacement: str }

    Returns:
        { success: true, text: str, delta: int }
    """
    data = _json_body()
    text = _require_str(data, 'text')
    replacement = _require_str(data, 'replacement')
    error = _parse_error(data)

    corrected = replace_word(text, error, replacement)
    return jsonify({
        'success': True,
        'text': corrected,
        'delta': len(replacement) - len(error.word)
    })


# =============================================================================
# CORRECTION SESSIONS
# =============================================================================

@spelling_blueprint.route('/sessions', methods=['POST'])
@handle_spelling_errors
def create_session():
    """
    Start a correction session.

    Request body:
        { text: str, background: bool = false }

    Returns:
        { success: true, session: {...} }
    """
    data = _json_body()
    text = _require_str(data, 'text')
    background = bool(data.get('background', False))

    session = get_session_manager().create_session(text, background=background)
    return jsonify({'success': True, 'session': session.to_dict()}), 201


@spelling_blueprint.route('/sessions', methods=['GET'])
@handle_spelling_errors
def list_sessions():
    """List live sessions (without their text)."""
    return jsonify({'success': True, 'sessions': get_session_manager().list_sessions()})


@spelling_blueprint.route('/sessions/<session_id>', methods=['GET'])
@handle_spelling_errors
def get_session(session_id: str):
    session = get_session_manager().get_session(session_id)
    return jsonify({'success': True, 'session': session.to_dict()})


@spelling_blueprint.route('/sessions/<session_id>/replace', methods=['POST'])
@handle_spelling_errors
def session_replace(session_id: str):
    """
    Replace the current error in a session.

    Request body:
        { replacement: str }
    """
    replacement = _require_str(_json_body(), 'replacement')
    session = get_session_manager().get_session(session_id)
    session.replace(replacement)
    return jsonify({'success': True, 'session': session.to_dict()})


@spelling_blueprint.route('/sessions/<session_id>/skip', methods=['POST'])
@handle_spelling_errors
def session_skip(session_id: str):
    session = get_session_manager().get_session(session_id)
    session.skip()
    return jsonify({'success': True, 'session': session.to_dict()})


@spelling_blueprint.route('/sessions/<session_id>/apply', methods=['POST'])
@handle_spelling_errors
def session_apply(session_id: str):
    """Finish a session and return the corrected text."""
    session = get_session_manager().get_session(session_id)
    text = session.apply()
    return jsonify({'success': True, 'text': text, 'session': session.to_dict(include_text=False)})


@spelling_blueprint.route('/sessions/<session_id>/cancel', methods=['POST'])
@handle_spelling_errors
def session_cancel(session_id: str):
    """Discard a session's corrections and return the original text."""
    session = get_session_manager().get_session(session_id)
    text = session.cancel()
    return jsonify({'success': True, 'text': text, 'session': session.to_dict(include_text=False)})
