from flask import Blueprint, render_template, request, jsonify, session, current_app
from app.utils.logging import log_project_visit
from app.projects.tic_tac_toe.core.constants import (
    BOARD_SIZES,
    DEFAULT_BOARD_SIZE,
    RECENT_GAMES_MAX_LIMIT,
    SCOREBOARD_LIMIT,
)
from app.projects.tic_tac_toe.services.game_store import GameStore, count_results
from app.projects.tic_tac_toe.services.session_registry import registry

tic_tac_toe_bp = Blueprint('tic_tac_toe', __name__,
                          template_folder='templates')

SESSION_KEY = 'tic_tac_toe_session'


def _default_size():
    size = current_app.config.get('TIC_TAC_TOE_DEFAULT_SIZE', DEFAULT_BOARD_SIZE)
    return size if size in BOARD_SIZES else DEFAULT_BOARD_SIZE


def _scoreboard_limit():
    return current_app.config.get('TIC_TAC_TOE_SCOREBOARD_LIMIT', SCOREBOARD_LIMIT)


def _current_table():
    """Game table for this browser, created on first use."""
    key = session.get(SESSION_KEY)
    if not key:
        key = registry.new_key()
        session[SESSION_KEY] = key
    return registry.get(key, _default_size())


def _int_param(value):
    """Return a JSON body value as an int, or None for anything that is not an integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip('-').isdigit():
        return int(value)
    return None


@tic_tac_toe_bp.route('/')
def index():
    """Display the Tic-Tac-Toe game - self-contained HTML with inline CSS/JS"""
    log_project_visit('tic_tac_toe', 'Tic-Tac-Toe')
    table = _current_table()
    with table.lock:
        state = table.state()
    return render_template('tic_tac_toe.html', board_sizes=BOARD_SIZES, state=state)


@tic_tac_toe_bp.route('/api/state')
def state():
    table = _current_table()
    with table.lock:
        return jsonify(table.state())


@tic_tac_toe_bp.route('/api/move', methods=['POST'])
def move():
    data = request.get_json(silent=True) or {}
    index = _int_param(data.get('index'))
    if index is None:
        return jsonify({'error': 'A cell index is required'}), 400

    table = _current_table()
    with table.lock:
        accepted = table.engine.move(index)
        result = table.state()
    result['accepted'] = accepted
    return jsonify(result)


@tic_tac_toe_bp.route('/api/undo', methods=['POST'])
def undo():
    table = _current_table()
    with table.lock:
        accepted = table.engine.undo()
        result = table.state()
    result['accepted'] = accepted
    return jsonify(result)


@tic_tac_toe_bp.route('/api/reset', methods=['POST'])
def reset():
    """Start a new game. Passing a size also changes the board size."""
    data = request.get_json(silent=True) or {}
    size = None
    if data.get('size') is not None:
        size = _int_param(data.get('size'))
        if size not in BOARD_SIZES:
            sizes = ', '.join(str(s) for s in BOARD_SIZES)
            return jsonify({'error': f'Board size must be one of {sizes}'}), 400

    table = _current_table()
    with table.lock:
        table.engine.reset(size)
        return jsonify(table.state())


@tic_tac_toe_bp.route('/api/scoreboard')
def scoreboard():
    games = GameStore().scoreboard(_scoreboard_limit())
    if games is None:
        return jsonify({'error': 'Unable to load the scoreboard'}), 503
    return jsonify({
        'games': games,
        'counts': count_results((game['status'], 1) for game in games),
    })


@tic_tac_toe_bp.route('/api/games/recent')
def recent_games():
    limit = request.args.get('limit', SCOREBOARD_LIMIT, type=int)
    if limit < 1 or limit > RECENT_GAMES_MAX_LIMIT:
        return jsonify({'error': f'Limit must be between 1 and {RECENT_GAMES_MAX_LIMIT}'}), 400
    games = GameStore().recent_completed(limit)
    if games is None:
        return jsonify({'error': 'Unable to load recent games'}), 503
    return jsonify({'games': games})


@tic_tac_toe_bp.route('/api/games/<int:game_id>')
def view_game(game_id):
    """Stored board for the replay popup."""
    game = GameStore().get(game_id)
    if game is None:
        return jsonify({'error': f'Game {game_id} not found'}), 404
    return jsonify(game)
