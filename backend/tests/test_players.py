import re

from territory.models import PALETTE
from territory.services.game.players import Leaderboard, PlayerRegistry


def test_register_assigns_defaults():
    registry = PlayerRegistry()
    player = registry.register('sid-1')
    assert re.fullmatch(r'Player\d{1,3}', player.name)
    assert player.color == PALETTE[0]
    assert player.score == 0
    assert player.online is True
    assert registry.get('sid-1') is player


def test_palette_cycles_across_reconnects():
    registry = PlayerRegistry()
    colors = []
    for i in range(len(PALETTE) + 2):
        colors.append(registry.register(f'sid-{i}').color)
        registry.mark_offline(f'sid-{i}')
    registry.prune_offline()
    colors.append(registry.register('late').color)
    assert colors[:len(PALETTE)] == PALETTE
    assert colors[len(PALETTE):] == PALETTE[:3]


def test_mark_offline_keeps_record():
    registry = PlayerRegistry()
    registry.register('sid-1')
    player = registry.mark_offline('sid-1')
    assert player.online is False
    assert registry.get('sid-1') is player
    assert registry.mark_offline('missing') is None
    assert [p.id for p in registry.all()] == ['sid-1']


def test_prune_offline_only_removes_offline():
    registry = PlayerRegistry()
    registry.register('a')
    registry.register('b')
    registry.mark_offline('a')
    assert registry.prune_offline() == 1
    assert [p.id for p in registry.all()] == ['b']


def test_reset_scores():
    registry = PlayerRegistry()
    for sid in ('a', 'b'):
        registry.register(sid).score = 7
    registry.reset_scores()
    assert [p.score for p in registry.all()] == [0, 0]


def test_leaderboard_orders_by_score_with_stable_ties():
    registry = PlayerRegistry()
    scores = {'a': 3, 'b': 5, 'c': 3, 'd': 0, 'e': 5}
    for sid, score in scores.items():
        registry.register(sid).score = score
    board = Leaderboard(registry)
    first = [p.id for p in board.rank()]
    assert first == ['b', 'e', 'a', 'c', 'd']
    assert [p.id for p in board.rank()] == first
    assert board.leader().id == 'b'


def test_leaderboard_caps_size_and_skips_offline():
    registry = PlayerRegistry()
    for i in range(15):
        registry.register(f'sid-{i}').score = i
    registry.mark_offline('sid-14')
    board = Leaderboard(registry, size=10)
    ranked = board.rank()
    assert len(ranked) == 10
    assert ranked[0].id == 'sid-13'
    assert all(p.online for p in ranked)
    assert board.to_list()[0] == ranked[0].to_dict()


def test_empty_leaderboard():
    board = Leaderboard(PlayerRegistry())
    assert board.rank() == []
    assert board.leader() is None
