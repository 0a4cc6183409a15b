from flask import Blueprint, current_app, jsonify

game = Blueprint('game', __name__)


def _ctx():
    return current_app.extensions['territory']


@game.route('/state', methods=['GET'])
def get_game_state():
    """
    Returns round status, the leaderboard and the rules in force.
    """
    ctx = _ctx()
    with ctx.lock:
        rounds = ctx.rounds
        round_info = rounds.info()
        round_info['winner'] = rounds.winner
        round_info['endedReason'] = rounds.ended_reason
        response = {
            'round': round_info,
            'leaderboard': ctx.leaderboard.to_list(),
            'players': {
                'online': len(ctx.registry.online()),
                'total': len(ctx.registry.all()),
            },
            'settings': {
                'gridSize': ctx.grid.size,
                'cooldownMs': ctx.grid.cooldown_ms,
                'victoryThreshold': rounds.victory_threshold,
                'roundDurationMs': rounds.duration_ms,
            },
        }
    return jsonify(response), 200


@game.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    ctx = _ctx()
    with ctx.lock:
        return jsonify(ctx.leaderboard.to_list()), 200


@game.route('/grid', methods=['GET'])
def get_grid():
    ctx = _ctx()
    with ctx.lock:
        return jsonify({'grid': ctx.grid.snapshot()}), 200


@game.route('/grid/<int(signed=True):x>/<int(signed=True):y>', methods=['GET'])
def get_cell(x, y):
    ctx = _ctx()
    with ctx.lock:
        cell = ctx.grid.find(x, y)
        if cell is None:
            return jsonify({'error': 'Invalid coordinates'}), 404
        return jsonify(cell.to_view(ctx.clock(), ctx.grid.cooldown_ms)), 200
