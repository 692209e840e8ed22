# tests/test_route_game.py
import pytest

from route_game import RouteEngine
from routecore.constants import UNREACHABLE_PAR, ColorTag, RouteConfig
from routecore.results import Action


@pytest.fixture
def engine(line_graph, clock):
    return RouteEngine(line_graph, clock=clock)


@pytest.fixture
def branch_engine(branch_graph, clock):
    eng = RouteEngine(branch_graph, clock=clock)
    eng.set_route("A", "G")
    return eng


def test_set_route_computes_par_and_optimal_path(engine):
    setup = engine.set_route("A", "D")
    assert setup.par == 2
    assert setup.optimal_path == ["A", "B", "C", "D"]
    assert setup.reachable
    assert engine.current_path == ["A"]
    assert engine.round_ended is False


def test_line_scenario_auto_completes(engine, clock):
    engine.set_route("A", "D")

    added = engine.add_country("B")
    assert added.action is Action.ADDED
    assert added.route == ["A", "B"]
    assert added.steps == 1

    clock.advance(12.5)
    done = engine.add_country("C")
    assert done.action is Action.COMPLETE
    assert done.route == ["A", "B", "C", "D"]
    assert done.steps == 2
    assert done.par == 2
    assert done.par_diff == 0
    assert done.time == pytest.approx(12.5)
    assert done.hints_used == 0
    assert engine.round_ended is True


def test_country_not_bordering_route_is_invalid(engine):
    engine.set_route("A", "D")
    result = engine.add_country("C")
    assert result.action is Action.INVALID
    assert "C" in result.message
    assert engine.current_path == ["A"]
    assert engine.path_history == []


def test_branching_from_earlier_country_is_valid(branch_engine):
    branch_engine.add_country("B")
    branch_engine.add_country("C")
    assert branch_engine.current_path == ["A", "B", "C"]

    # E borders A but not C
    assert branch_engine.can_add_country("E")
    result = branch_engine.add_country("E")
    assert result.action is Action.ADDED
    assert branch_engine.current_path == ["A", "B", "C", "E"]

    done = branch_engine.add_country("F")
    assert done.action is Action.COMPLETE
    assert done.route == ["A", "B", "C", "E", "F", "G"]
    assert done.steps == 4
    assert done.par == 2
    assert done.par_diff == 2


def test_par_diff_for_longer_route(branch_graph, clock):
    eng = RouteEngine(branch_graph, clock=clock)
    setup = eng.set_route("A", "D")
    assert setup.optimal_path == ["A", "B", "C", "D"]
    assert setup.par == 2

    eng.add_country("E")
    eng.add_country("F")
    done = eng.add_country("G")
    assert done.action is Action.COMPLETE
    assert done.steps == 3
    assert done.par_diff == 1


def test_add_then_undo_restores_state(branch_engine):
    branch_engine.add_country("B")
    branch_engine.record_wrong_guess()
    before_path = list(branch_engine.current_path)
    before_wrong = branch_engine.wrong_guesses

    branch_engine.add_country("C")
    branch_engine.record_wrong_guess()
    assert branch_engine.wrong_guesses == before_wrong + 1

    result = branch_engine.undo()
    assert result.action is Action.UNDONE
    assert result.removed == "C"
    assert result.route == before_path
    assert branch_engine.current_path == before_path
    assert branch_engine.wrong_guesses == before_wrong


def test_undo_with_only_start_left(branch_engine):
    assert branch_engine.undo().action is Action.CANNOT_UNDO
    branch_engine.add_country("B")
    assert branch_engine.undo().action is Action.UNDONE
    assert branch_engine.undo().action is Action.CANNOT_UNDO
    assert branch_engine.current_path == ["A"]


def test_undo_keeps_hints_spent(branch_engine):
    branch_engine.add_country("E")
    branch_engine.get_hint()
    branch_engine.undo()
    assert branch_engine.hints_used == 1
    assert branch_engine.get_progress().hints_remaining == 2


def test_hint_names_next_optimal_country(branch_engine):
    hint = branch_engine.get_hint()
    assert hint.action is Action.HINT
    assert hint.country == "E"
    assert hint.message == "Hint 1/3: Try E"
    assert hint.hints_remaining == 2

    branch_engine.add_country("E")
    hint = branch_engine.get_hint()
    assert hint.country == "F"
    assert hint.hints_remaining == 1


def test_hint_after_diverging_advises_undo(branch_engine):
    branch_engine.add_country("B")
    hint = branch_engine.get_hint()
    assert hint.action is Action.HINT
    assert hint.country is None
    assert "undo" in hint.message.lower()
    assert branch_engine.hints_used == 1


def test_hint_budget_is_enforced(engine):
    engine.set_route("A", "D")
    for _ in range(3):
        assert engine.get_hint().action is Action.HINT

    result = engine.get_hint()
    assert result.action is Action.NO_HINTS_LEFT
    assert engine.hints_used == 3


def test_no_hint_when_route_as_long_as_optimal(branch_engine):
    for country in ("B", "C", "E"):
        branch_engine.add_country(country)
    assert len(branch_engine.current_path) == len(branch_engine.optimal_path)

    assert branch_engine.get_hint().action is Action.NO_HINT_AVAILABLE
    assert branch_engine.hints_used == 0


def test_custom_hint_budget(line_graph, clock):
    eng = RouteEngine(line_graph, config=RouteConfig(max_hints=1), clock=clock)
    eng.set_route("A", "D")
    assert eng.get_hint().message == "Hint 1/1: Try B"
    assert eng.get_hint().action is Action.NO_HINTS_LEFT


def test_give_up_reveals_unmodified_optimal_path(engine, clock):
    setup = engine.set_route("A", "D")
    clock.advance(3)
    result = engine.give_up()
    assert result.action is Action.GAVE_UP
    assert result.optimal_path == setup.optimal_path == ["A", "B", "C", "D"]
    assert result.route == ["A"]
    assert result.par == 2
    assert result.time == pytest.approx(3)
    assert result.hints_used == 0


def test_give_up_after_partial_play(branch_engine):
    optimal = list(branch_engine.optimal_path)
    branch_engine.add_country("B")
    branch_engine.get_hint()
    result = branch_engine.give_up()
    assert result.route == ["A", "B"]
    assert result.optimal_path == optimal
    assert result.hints_used == 1


def test_operations_ignored_after_round_ends(engine):
    engine.set_route("A", "D")
    engine.add_country("B")
    engine.add_country("C")

    assert engine.add_country("A").action is Action.IGNORE
    assert engine.undo().action is Action.IGNORE
    assert engine.get_hint().action is Action.IGNORE
    assert engine.give_up().action is Action.IGNORE
    assert engine.current_path == ["A", "B", "C", "D"]


def test_handle_timeout_is_give_up(engine):
    engine.set_route("A", "D")
    result = engine.handle_timeout()
    assert result.action is Action.GAVE_UP
    assert engine.round_ended
    assert engine.handle_timeout().action is Action.IGNORE


def test_unreachable_route_uses_sentinel_par(branch_engine):
    setup = branch_engine.set_route("A", "X")
    assert setup.par == UNREACHABLE_PAR
    assert setup.optimal_path is None
    assert not setup.reachable
    assert branch_engine.get_hint().action is Action.NO_HINT_AVAILABLE
    assert branch_engine.give_up().optimal_path is None


def test_operations_ignored_before_first_round(line_graph):
    eng = RouteEngine(line_graph)
    assert eng.add_country("B").action is Action.IGNORE
    assert eng.render_tags() == []


def test_set_route_resets_previous_round(engine):
    engine.set_route("A", "D")
    engine.add_country("B")
    engine.get_hint()
    engine.record_wrong_guess()

    engine.set_route("D", "A")
    assert engine.current_path == ["D"]
    assert engine.hints_used == 0
    assert engine.wrong_guesses == 0
    assert engine.path_history == []
    assert engine.optimal_path == ["D", "C", "B", "A"]


def test_progress(branch_engine):
    branch_engine.add_country("B")
    progress = branch_engine.get_progress()
    assert progress.route == ["A", "B"]
    assert progress.steps == 1
    assert progress.par == 2
    assert progress.hints_used == 0
    assert progress.hints_remaining == 3
    assert progress.to_dict() == {
        "route": ["A", "B"],
        "steps": 1,
        "par": 2,
        "hintsUsed": 0,
        "hintsRemaining": 3,
    }


def test_progress_steps_exclude_destination(engine):
    engine.set_route("A", "D")
    engine.add_country("B")
    engine.add_country("C")
    assert engine.get_progress().steps == 2


def test_on_complete_callback(line_graph, clock):
    seen = []
    eng = RouteEngine(line_graph, clock=clock, on_complete=seen.append)
    eng.set_route("A", "D")
    eng.add_country("B")
    eng.add_country("C")
    eng.set_route("A", "D")
    eng.give_up()
    assert [r.action for r in seen] == [Action.COMPLETE, Action.GAVE_UP]


def test_canonical_order_sorts_neighbors(clock):
    diamond = {"S": ["Y", "X"], "X": ["S", "T"], "Y": ["S", "T"], "T": ["X", "Y"]}
    assert RouteEngine(diamond, clock=clock).set_route("S", "T").optimal_path == ["S", "Y", "T"]

    canonical = RouteEngine(diamond, config=RouteConfig(canonical_order=True), clock=clock)
    assert canonical.set_route("S", "T").optimal_path == ["S", "X", "T"]


def test_engines_do_not_share_state(line_graph, clock):
    first = RouteEngine(line_graph, clock=clock)
    second = RouteEngine(line_graph, clock=clock)
    first.set_route("A", "D")
    second.set_route("D", "A")
    first.add_country("B")
    assert second.current_path == ["D"]


def test_render_tags(branch_engine):
    branch_engine.add_country("B")
    assert branch_engine.render_tags(hint="E") == [
        ("A", ColorTag.START),
        ("B", ColorTag.PATH),
        ("G", ColorTag.END),
        ("E", ColorTag.HINT),
    ]
    assert branch_engine.optimal_tags() == [
        ("A", ColorTag.START),
        ("E", ColorTag.OPTIMAL),
        ("F", ColorTag.OPTIMAL),
        ("G", ColorTag.END),
    ]


def test_render_tags_after_completion(engine):
    engine.set_route("A", "D")
    engine.add_country("B")
    engine.add_country("C")
    assert engine.render_tags() == [
        ("A", ColorTag.START),
        ("B", ColorTag.PATH),
        ("C", ColorTag.PATH),
        ("D", ColorTag.END),
    ]


def test_result_dicts_use_interface_keys(engine):
    engine.set_route("A", "D")
    assert engine.add_country("C").to_dict() == {
        "action": "invalid",
        "message": "C doesn't border any country on your route",
    }
    engine.add_country("B")
    done = engine.add_country("C").to_dict()
    assert done["action"] == "complete"
    assert done["parDiff"] == 0
    assert done["optimalPath"] == ["A", "B", "C", "D"]
    assert engine.give_up().to_dict() == {"action": "ignore"}


def test_optimal_path_cannot_be_changed_by_callers(engine):
    setup = engine.set_route("A", "D")
    setup.optimal_path.append("Z")
    engine.get_optimal_path().append("Z")

    assert engine.get_hint().country == "B"
    assert engine.give_up().optimal_path == ["A", "B", "C", "D"]


def test_completion_result_holds_its_own_optimal_path(engine):
    engine.set_route("A", "D")
    engine.add_country("B")
    done = engine.add_country("C")
    done.optimal_path.clear()
    assert engine.optimal_path == ["A", "B", "C", "D"]
