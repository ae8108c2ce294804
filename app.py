"""
SpellReview - Main Flask Application
Serves the spelling check and correction-session API.
"""
from flask import Flask, jsonify, g, request

from config_logging import get_config, get_logger, StructuredLogger, VERSION, APP_NAME
from spell_review import spelling_blueprint
from spell_review.dictionary import COMMON_MISSPELLINGS, KNOWN_WORDS

config = get_config()
logger = get_logger('app')

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = config.max_content_length
app.register_blueprint(spelling_blueprint, url_prefix='/api/spelling')


@app.before_request
def assign_correlation_id():
    """Tag every request so log lines can be traced back to it."""
    g.correlation_id = request.headers.get('X-Correlation-ID') or StructuredLogger.new_correlation_id()
    StructuredLogger.set_correlation_id(g.correlation_id)


@app.after_request
def add_correlation_header(response):
    response.headers['X-Correlation-ID'] = getattr(g, 'correlation_id', '')
    return response


@app.route('/api/health', methods=['GET'])
def health():
    """Report service status and dictionary sizes"""
    return jsonify({
        'status': 'ok',
        'app': APP_NAME,
        'version': VERSION,
        'misspellings': len(COMMON_MISSPELLINGS),
        'known_words': len(KNOWN_WORDS)
    })


@app.errorhandler(413)
def too_large(e):
    return jsonify({
        'success': False,
        'error': {'code': 'PAYLOAD_TOO_LARGE', 'message': 'Text exceeds the configured size limit'}
    }), 413


@app.errorhandler(404)
def not_found(e):
    return jsonify({
        'success': False,
        'error': {'code': 'NOT_FOUND', 'message': 'Endpoint not found'}
    }), 404


if __name__ == '__main__':
    _, errors = config.validate()
    for err in errors:
        logger.warning(f"Configuration problem: {err}")
    logger.info(f"Starting {APP_NAME} v{VERSION} on {config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=config.debug)
