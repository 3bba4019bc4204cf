import logging
import os

from flask import Flask, request, jsonify
from flask_cors import CORS

from game_session import GameSession, DEFAULT_SHARE_URL

logger = logging.getLogger(__name__)

HOST = os.getenv("GAME_HOST", "0.0.0.0")
PORT = int(os.getenv("GAME_PORT", "5000"))
SHARE_URL = os.getenv("GAME_SHARE_URL", DEFAULT_SHARE_URL)

app = Flask(__name__)
CORS(app, resources={r"/*": {"origins": "*"}})

session = GameSession(share_url=SHARE_URL)


@app.route('/new-game', methods=['POST'])
def new_game():
    """Starts a fresh game, dropping the current one."""
    global session
    try:
        session = GameSession(share_url=SHARE_URL)
        logger.info("Started a new game")
        return jsonify(session.to_dict())
    except Exception as e:
        logger.exception(f"Failed to start a game: {e}")
        return jsonify({'error': str(e)}), 500


@app.route('/state', methods=['GET'])
def get_state():
    try:
        return jsonify(session.to_dict())
    except Exception as e:
        logger.exception(f"Failed to read the game state: {e}")
        return jsonify({'error': str(e)}), 500


@app.route('/move', methods=['POST'])
def move():
    """Applies a move; `changed` is False when the move did nothing."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or 'direction' not in payload:
        return jsonify({'error': 'Missing direction'}), 400
    try:
        changed = session.move(payload['direction'])
        return jsonify(dict(session.to_dict(), changed=changed))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.exception(f"Move failed: {e}")
        return jsonify({'error': str(e)}), 500


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logger.info(f"Server starting on http://{HOST}:{PORT}")
    app.run(host=HOST, port=PORT, debug=False)
