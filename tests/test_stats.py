import pytest

from tictactoe.errors import InvalidInputError, NotFoundError
from tictactoe.stats import derive_stats


def test_new_player_has_zeroed_stats(alice):
    assert alice.stats.model_dump() == {
        'games_played': 0,
        'games_won': 0,
        'games_lost': 0,
        'games_drawn': 0,
        'total_moves': 0,
        'average_moves_per_win': 0,
        'win_rate': 0,
        'efficiency': 0,
    }


def test_single_win(services, alice):
    stats = services.stats.update_after_game(alice.id, 'won', 5).stats
    assert stats.games_played == 1
    assert stats.games_won == 1
    assert stats.total_moves == 5
    assert stats.win_rate == 100
    assert stats.efficiency == 0.2
    assert stats.average_moves_per_win == 5


@pytest.mark.parametrize('outcome,field', [('lost', 'games_lost'), ('drawn', 'games_drawn')])
def test_non_win_keeps_ratios_at_zero(services, alice, outcome, field):
    stats = services.stats.update_after_game(alice.id, outcome, 4).stats
    assert getattr(stats, field) == 1
    assert stats.games_played == 1
    assert stats.total_moves == 4
    assert stats.win_rate == 0
    assert stats.efficiency == 0
    assert stats.average_moves_per_win == 0


def test_accumulates_across_games(services, alice):
    services.stats.update_after_game(alice.id, 'won', 5)
    services.stats.update_after_game(alice.id, 'lost', 4)
    services.stats.update_after_game(alice.id, 'won', 2)
    stats = services.players.get_player_stats(alice.id)
    assert stats.games_played == 3
    assert stats.games_won == 2
    assert stats.games_lost == 1
    assert stats.total_moves == 11
    assert stats.win_rate == pytest.approx(66.67, abs=0.01)
    assert stats.efficiency == pytest.approx(0.1818, abs=1e-4)
    assert stats.average_moves_per_win == 5.5


def test_derive_stats_from_counters():
    stats = derive_stats(games_won=2, games_lost=0, games_drawn=0, total_moves=8)
    assert stats.games_played == 2
    assert stats.average_moves_per_win == 4
    assert derive_stats(0, 0, 0, 0).win_rate == 0


def test_update_rejects_bad_input(services, alice):
    with pytest.raises(NotFoundError):
        services.stats.update_after_game('missing', 'won', 5)
    with pytest.raises(InvalidInputError):
        services.stats.update_after_game(alice.id, 'forfeit', 5)
    with pytest.raises(InvalidInputError):
        services.stats.update_after_game(alice.id, 'won', -1)


# -------------------- Triggered by games -------------------- #

def test_completed_game_credits_whole_move_count(services, active_game, alice, bob):
    for player_id, row, col in [
        (alice.id, 0, 0), (bob.id, 1, 1), (alice.id, 0, 1), (bob.id, 1, 0), (alice.id, 0, 2),
    ]:
        services.games.make_move(active_game.id, player_id, row, col)

    winner = services.players.get_player_stats(alice.id)
    assert winner.games_won == 1
    assert winner.win_rate == 100
    assert winner.total_moves == 5
    assert winner.efficiency == 0.2

    loser = services.players.get_player_stats(bob.id)
    assert loser.games_lost == 1
    assert loser.total_moves == 5
    assert loser.win_rate == 0


def test_draw_credits_both_players(services, active_game, alice, bob):
    for player_id, row, col in [
        (alice.id, 0, 0), (bob.id, 0, 1), (alice.id, 0, 2),
        (bob.id, 1, 1), (alice.id, 1, 0), (bob.id, 1, 2),
        (alice.id, 2, 1), (bob.id, 2, 0), (alice.id, 2, 2),
    ]:
        services.games.make_move(active_game.id, player_id, row, col)
    for player in (alice, bob):
        stats = services.players.get_player_stats(player.id)
        assert stats.games_drawn == 1
        assert stats.games_played == 1
        assert stats.total_moves == 9


def test_unfinished_game_does_not_touch_stats(services, active_game, alice):
    services.games.make_move(active_game.id, alice.id, 0, 0)
    assert services.players.get_player_stats(alice.id).games_played == 0


def test_deleted_participant_is_skipped(services, active_game, alice, bob):
    services.players.delete_player(bob.id)
    for player_id, row, col in [
        (alice.id, 0, 0), (bob.id, 1, 1), (alice.id, 0, 1), (bob.id, 1, 0), (alice.id, 0, 2),
    ]:
        result = services.games.make_move(active_game.id, player_id, row, col)
    assert result.game.status == 'completed'
    assert services.players.get_player_stats(alice.id).games_won == 1
