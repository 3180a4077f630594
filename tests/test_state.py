from tracker.config import MatchConfig
from tracker.state import MatchState


def test_new_match_starting_values():
    commander = MatchState.new_match(4, commander=True)
    assert commander.life == [40, 40, 40, 40]
    assert commander.poison == [0, 0, 0, 0]
    assert commander.commander_damage == [[0] * 4 for _ in range(4)]
    assert commander.turn == 0

    standard = MatchState.new_match(2, commander=False)
    assert standard.life == [20, 20]


def test_player_count_is_clamped():
    assert MatchState.new_match(1).players == 2
    assert MatchState.new_match(9).players == 4
    assert MatchConfig(players=0).players == 2


def test_copy_is_deep():
    state = MatchState.new_match(2, commander=True)
    clone = state.copy()
    clone.life[0] = 0
    clone.commander_damage[0][1] = 5

    assert state.life == [40, 40]
    assert state.commander_damage[0][1] == 0


def test_life_can_go_negative():
    state = MatchState.new_match(2, commander=False)
    result = state.change_life(0, -25)
    assert result["success"] is True
    assert state.life[0] == -5


def test_out_of_range_player_is_rejected_without_change():
    state = MatchState.new_match(2, commander=False)
    result = state.change_life(2, -3)
    assert result["success"] is False
    assert "between 1 and 2" in result["message"]
    assert state.life == [20, 20]


def test_set_life():
    state = MatchState.new_match(3, commander=False)
    assert state.set_life(2, 7)["life"] == 7
    assert state.life == [20, 20, 7]


def test_poison_never_below_zero():
    state = MatchState.new_match(2)
    state.add_poison(1, 3)
    state.add_poison(1, -5)
    assert state.poison[1] == 0


def test_commander_damage_rules():
    state = MatchState.new_match(3, commander=True)

    assert state.add_commander_damage(0, 2, 5)["damage"] == 5
    assert state.add_commander_damage(0, 2, -9)["damage"] == 0
    assert state.add_commander_damage(1, 1, 3)["success"] is False
    assert state.add_commander_damage(0, 3, 3)["success"] is False
    # Life is tracked separately
    assert state.life == [40, 40, 40]


def test_commander_damage_requires_commander_match():
    state = MatchState.new_match(2, commander=False)
    result = state.add_commander_damage(0, 1, 4)
    assert result["success"] is False
    assert state.commander_damage == [[0, 0], [0, 0]]


def test_next_turn_wraps():
    state = MatchState.new_match(3)
    for expected in (1, 2, 0):
        assert state.next_turn()["turn"] == expected


def test_elimination():
    state = MatchState.new_match(4, commander=True)
    state.set_life(0, 0)
    state.add_poison(1, 10)
    state.add_commander_damage(2, 3, 21)

    assert [state.is_eliminated(i) for i in range(4)] == [True, True, True, False]
    assert state.to_dict()["eliminated"] == [True, True, True, False]


def test_config_json_round_trip():
    config = MatchConfig.standard(3)
    assert MatchConfig.from_json(config.to_json()) == config
    assert config.starting_life == 20
    assert MatchConfig.commander_pod().starting_life == 40
