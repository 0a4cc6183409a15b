from territory.errors import RoundAlreadyActive

WAITING = 'waiting'
ACTIVE = 'active'


class RoundController:
    """Round state machine: waiting -> active -> waiting.

    "Ended" is a transition, not a phase. After it the controller sits in
    ``waiting`` and keeps ``winner``/``ended_reason`` for late joiners until
    the next start. Every public method takes the game lock itself; the lock
    is re-entrant so the claim path can call ``check_victory`` while holding
    it.
    """

    def __init__(self, ctx, duration_ms=600_000, tick_interval_ms=5000, victory_threshold=1000):
        self.ctx = ctx
        self.duration_ms = duration_ms
        self.tick_interval_ms = tick_interval_ms
        self.victory_threshold = victory_threshold

        self.phase = WAITING
        self.round_number = 0
        self.start_time = None
        self.end_time = None
        self.winner = None
        self.ended_reason = None
        # Last round-ended payload, replayed to clients joining between rounds
        self.last_result = None
        self._end_token = None
        self._tick_token = None

    @property
    def is_active(self):
        return self.phase == ACTIVE

    def info(self):
        return {
            'roundNumber': self.round_number,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'isActive': self.phase == ACTIVE,
            'isWaiting': self.phase == WAITING,
        }

    def request_start(self):
        ctx = self.ctx
        with ctx.lock:
            if self.phase == ACTIVE:
                raise RoundAlreadyActive()

            now = ctx.clock()
            self.round_number += 1
            self.start_time = now
            self.end_time = now + self.duration_ms
            self.winner = None
            self.ended_reason = None

            ctx.grid.initialize()
            ctx.registry.reset_scores()
            # Grid is empty now, so no cell can point at a pruned player
            pruned = ctx.registry.prune_offline()

            self.phase = ACTIVE
            self._cancel_timers()
            self._end_token = ctx.scheduler.schedule(
                self.end_time - now, self._on_end_timer, self.round_number
            )
            self._tick_token = ctx.scheduler.schedule(
                self.tick_interval_ms, self._on_tick, self.round_number
            )
            ctx.logger.info(
                f"[round-start] round={self.round_number} end_time={self.end_time} pruned_offline={pruned}"
            )

            ctx.broadcaster.send_to_all('round-started', {
                'roundNumber': self.round_number,
                'startTime': self.start_time,
                'endTime': self.end_time,
                'duration': self.duration_ms,
            })
            ctx.broadcaster.send_to_all('game-state-reset', {'grid': ctx.grid.snapshot()})

    def end(self, reason, early_winner=None):
        """Finish the active round. Returns False if no round was active."""
        ctx = self.ctx
        with ctx.lock:
            if self.phase != ACTIVE:
                return False

            self._cancel_timers()
            winner = early_winner if early_winner is not None else ctx.leaderboard.leader()
            self.winner = winner.to_dict() if winner is not None else None
            self.ended_reason = reason
            self.phase = WAITING

            if self.winner:
                message = (
                    f"Round {self.round_number} Winner: {self.winner['name']} "
                    f"with {self.winner['score']} tiles!"
                )
            else:
                message = "Time's up!"
            ctx.logger.info(
                f"[round-end] round={self.round_number} reason={reason} "
                f"winner={self.winner['id'] if self.winner else None}"
            )

            self.last_result = {
                'roundNumber': self.round_number,
                'reason': reason,
                'winner': self.winner,
                'leaderboard': ctx.leaderboard.to_list(),
                'message': message,
            }
            ctx.broadcaster.send_to_all('round-ended', self.last_result)
            return True

    def check_victory(self):
        with self.ctx.lock:
            if self.phase != ACTIVE:
                return False
            leader = self.ctx.leaderboard.leader()
            if leader is not None and leader.score >= self.victory_threshold:
                return self.end('victory', leader)
            return False

    def shutdown(self):
        with self.ctx.lock:
            self._cancel_timers()

    def _cancel_timers(self):
        self.ctx.scheduler.cancel(self._end_token)
        self.ctx.scheduler.cancel(self._tick_token)
        self._end_token = None
        self._tick_token = None

    def _on_end_timer(self, round_number):
        with self.ctx.lock:
            if self.phase != ACTIVE or self.round_number != round_number:
                self.ctx.logger.info(f"[timer-abort] round={round_number} no longer active")
                return
            self._end_token = None
            self.end('time')

    def _on_tick(self, round_number):
        ctx = self.ctx
        with ctx.lock:
            if self.phase != ACTIVE or self.round_number != round_number:
                return
            now = ctx.clock()
            ctx.broadcaster.send_to_all('round-tick', {
                'currentTime': now,
                'endTime': self.end_time,
                'timeRemaining': max(0, self.end_time - now),
            })
            self._tick_token = ctx.scheduler.schedule(
                self.tick_interval_ms, self._on_tick, round_number
            )
