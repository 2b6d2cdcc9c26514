import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from tictactoe.errors import ConflictError, InvalidStateTransitionError, NotFoundError


def run_together(count, fn):
    """Start *count* calls of fn(i) behind a barrier; return results or raised exceptions."""
    barrier = threading.Barrier(count)

    def call(i):
        barrier.wait()
        try:
            return fn(i)
        except Exception as exc:  # collected for assertions
            return exc

    with ThreadPoolExecutor(max_workers=count) as pool:
        return list(pool.map(call, range(count)))


def test_same_cell_written_once(services, active_game, alice):
    outcomes = run_together(8, lambda _: services.games.make_move(active_game.id, alice.id, 1, 1))
    succeeded = [o for o in outcomes if not isinstance(o, Exception)]
    assert len(succeeded) == 1
    assert all(isinstance(o, ConflictError) for o in outcomes if isinstance(o, Exception))
    game = services.games.get_game_by_id(active_game.id)
    assert len(game.moves) == 1


def test_parallel_stats_updates_are_not_lost(services, alice):
    run_together(16, lambda _: services.stats.update_after_game(alice.id, 'won', 3))
    stats = services.players.get_player_stats(alice.id)
    assert stats.games_won == 16
    assert stats.total_moves == 48
    assert stats.efficiency == 16 / 48


def test_racing_signups_keep_email_unique(services):
    outcomes = run_together(8, lambda i: services.players.create_player(f'Dup {i}', 'DUP@example.com'))
    created = [o for o in outcomes if not isinstance(o, Exception)]
    assert len(created) == 1
    assert len(services.players.list_players()) == 1


def test_independent_games_progress_in_parallel(services):
    pairs = []
    for i in range(6):
        a = services.players.create_player(f'A{i}', f'a{i}@example.com')
        b = services.players.create_player(f'B{i}', f'b{i}@example.com')
        game = services.games.create_game(f'Game {i}')
        services.games.join_game(game.id, a.id)
        services.games.join_game(game.id, b.id)
        pairs.append((game.id, a.id, b.id))

    def finish(i):
        game_id, a, b = pairs[i]
        for player_id, row, col in [(a, 0, 0), (b, 1, 0), (a, 0, 1), (b, 1, 1), (a, 0, 2)]:
            result = services.games.make_move(game_id, player_id, row, col)
        return result.game.status

    assert run_together(len(pairs), finish) == ['completed'] * len(pairs)
    assert services.leaderboard.rank('wins', min_games=1).total == 12


def test_racing_joins_seat_exactly_two(services):
    game = services.games.create_game('Crowded')
    joiners = [services.players.create_player(f'J{i}', f'j{i}@example.com') for i in range(8)]

    outcomes = run_together(len(joiners), lambda i: services.games.join_game(game.id, joiners[i].id))
    seated = [o for o in outcomes if not isinstance(o, Exception)]
    assert len(seated) == 2
    assert all(isinstance(o, InvalidStateTransitionError) for o in outcomes if isinstance(o, Exception))

    final = services.games.get_game_by_id(game.id)
    assert final.status == 'active'
    assert len(final.players) == 2
    assert final.current_player_id == final.players[0]


def test_delete_racing_winning_move(services, active_game, alice, bob):
    for player_id, row, col in [(alice.id, 0, 0), (bob.id, 1, 0), (alice.id, 0, 1), (bob.id, 1, 1)]:
        services.games.make_move(active_game.id, player_id, row, col)

    def act(i):
        if i == 0:
            return services.games.make_move(active_game.id, alice.id, 0, 2)
        return services.games.delete_game(active_game.id)

    move, deletion = run_together(2, act)
    # Deletion is refused while the game is active, so the move lands either way
    assert move.game.status == 'completed'
    if isinstance(deletion, Exception):
        assert isinstance(deletion, InvalidStateTransitionError)
        assert len(services.games.get_game_by_id(active_game.id).moves) == 5
    else:
        with pytest.raises(NotFoundError):
            services.games.get_game_by_id(active_game.id)
    assert services.players.get_player_stats(alice.id).games_won == 1
