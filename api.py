"""
Flask REST API for the FlashCalc Web Portal
Exposes the calculator state and key handlers as JSON endpoints
"""
import logging
import threading

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
from calculator import Calculator
from database import Database, MemoryStore, StoreError
from host_context import HostContextNotifier, RequestHostSDK
from input_manager import InputManager

logger = logging.getLogger(__name__)


def open_store(db_path=config.DB_PATH):
    """Open the sqlite store, falling back to memory when storage is unavailable"""
    try:
        return Database(db_path)
    except StoreError as e:
        logger.warning("Persistent storage unavailable, state will not survive restarts: %s", e)
        return MemoryStore()


def serialize_state(calculator):
    display = calculator.display_state()
    return {
        'expression': display.expression_text,
        'result': display.result_text,
        'history': [{'expr': e.expr, 'result': e.result} for e in calculator.history],
    }


def create_app(store=None):
    app = Flask(__name__, static_folder=config.WEB_DIR, static_url_path='')
    CORS(app)  # Enable CORS for all routes

    # Initialize components
    calculator = Calculator(store if store is not None else open_store())
    input_manager = InputManager(calculator)
    lock = threading.Lock()
    app.config['CALCULATOR'] = calculator

    def state_response(**extra):
        data = serialize_state(calculator)
        data.update(extra)
        return jsonify({'success': True, 'data': data})

    def bad_request(message):
        return jsonify({'success': False, 'error': message}), 400

    def json_field(name):
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return None
        value = payload.get(name)
        return value if isinstance(value, str) else None

    @app.route('/')
    def index():
        """Serve the calculator page"""
        return app.send_static_file('index.html')

    @app.route('/api')
    def api_info():
        """API information"""
        return jsonify({
            'name': config.APP_NAME,
            'version': config.VERSION,
            'endpoints': [
                'GET /api/state',
                'GET /api/context',
                'POST /api/key',
                'POST /api/keydown',
                'POST /api/equals',
                'POST /api/clear',
                'POST /api/backspace',
                'POST /api/history/<index>/select',
            ],
        })

    @app.route('/api/state')
    def get_state():
        """Get current expression, live result and history"""
        with lock:
            return state_response()

    @app.route('/api/context')
    def get_context():
        """Report whether the page is embedded in a host mini app"""
        sdk = RequestHostSDK(request.headers, request.args)
        context = HostContextNotifier(sdk).start()
        return jsonify({
            'success': True,
            'data': {'environment': context.label, 'ready': context.ready},
        })

    @app.route('/api/key', methods=['POST'])
    def press_key():
        """Handle a keypad button: {"value": "7", "kind": "num"}"""
        value, kind = json_field('value'), json_field('kind')
        if not value or not kind:
            return bad_request('value and kind are required')
        with lock:
            handled = input_manager.handle_key(value, kind)
            return state_response(handled=handled)

    @app.route('/api/keydown', methods=['POST'])
    def key_down():
        """Handle a physical keyboard key: {"key": "Enter"}"""
        key = json_field('key')
        if not key:
            return bad_request('key is required')
        with lock:
            outcome = input_manager.handle_keydown(key)
            return state_response(handled=outcome.handled, prevent_default=outcome.prevent_default)

    @app.route('/api/equals', methods=['POST'])
    def equals():
        with lock:
            committed = calculator.commit()
            return state_response(committed=committed)

    @app.route('/api/clear', methods=['POST'])
    def clear():
        with lock:
            calculator.clear()
            return state_response()

    @app.route('/api/backspace', methods=['POST'])
    def backspace():
        with lock:
            calculator.backspace()
            return state_response()

    @app.route('/api/history/<int:index>/select', methods=['POST'])
    def select_history(index):
        """Load a past result into the expression"""
        with lock:
            if not calculator.select_history_index(index):
                return jsonify({'success': False, 'error': f'No history entry {index}'}), 404
            return state_response()

    @app.errorhandler(500)
    def internal_error(e):
        logger.error("Unhandled error: %s", e)
        return jsonify({'success': False, 'error': 'internal error'}), 500

    return app


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    print("\n" + "="*60)
    print(f"{config.APP_NAME} Web Portal API Server")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"Access from this device: http://localhost:{config.WEB_PORT}")
    if config.WEB_HOST == '0.0.0.0':
        print(f"Access from network: http://<your-ip>:{config.WEB_PORT}")
    print("="*60 + "\n")

    app = create_app()
    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)


if __name__ == '__main__':
    main()
