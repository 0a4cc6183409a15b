from flask import current_app, request

from territory import socketio
from territory.errors import GameError, RoundNotActive


def _ctx():
    return current_app.extensions['territory']


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    ctx = _ctx()
    sid = _get_sid()
    with ctx.lock:
        player = ctx.registry.register(sid)
        ctx.logger.info(f"[connect] sid={sid} name={player.name} color={player.color}")
        ctx.broadcaster.send_to(sid, 'initial-state', {
            'grid': ctx.grid.snapshot(),
            'users': [p.to_dict() for p in ctx.registry.all()],
            'currentUser': player.to_dict(),
        })
        ctx.broadcaster.send_to(sid, 'round-info', ctx.rounds.info())
        if ctx.rounds.last_result is not None and not ctx.rounds.is_active:
            ctx.broadcaster.send_to(sid, 'round-ended', ctx.rounds.last_result)
        ctx.broadcaster.send_to_all('user-joined', player.to_dict(), skip_sid=sid)


def handle_disconnect(reason=None):
    ctx = _ctx()
    sid = _get_sid()
    with ctx.lock:
        player = ctx.registry.mark_offline(sid)
        if player is None:
            return
        ctx.logger.info(f"[disconnect] sid={sid} name={player.name} reason={reason}")
        ctx.broadcaster.send_to_all('user-left', {'userId': sid})
        ctx.broadcaster.send_to_all('leaderboard-update', ctx.leaderboard.to_list())


def handle_start_round(data=None):
    ctx = _ctx()
    sid = _get_sid()
    try:
        ctx.rounds.request_start()
    except GameError as exc:
        ctx.broadcaster.send_to(sid, 'start-round-error', {'error': str(exc)})
        return
    with ctx.lock:
        player = ctx.registry.get(sid)
        ctx.logger.info(f"[start-round] round={ctx.rounds.round_number} by={player.name if player else sid}")


def handle_claim_cell(data=None):
    ctx = _ctx()
    sid = _get_sid()
    payload = data if isinstance(data, dict) else {}
    with ctx.lock:
        try:
            if not ctx.rounds.is_active:
                raise RoundNotActive()
            cell = ctx.grid.claim(sid, payload.get('x'), payload.get('y'))
        except GameError as exc:
            ctx.logger.debug(f"[claim-reject] sid={sid} data={data!r} error={exc}")
            ctx.broadcaster.send_to(sid, 'claim-error', {'error': str(exc)})
            return
        ctx.broadcaster.send_to_all('cell-claimed', cell.to_dict())
        ctx.broadcaster.send_to_all('leaderboard-update', ctx.leaderboard.to_list())
        ctx.rounds.check_victory()


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the game namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('start-round', handle_start_round, namespace=namespace)
    socketio.on_event('claim-cell', handle_claim_cell, namespace=namespace)
