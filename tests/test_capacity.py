from itertools import product

import pytest

from stagelink import CapacityError, CapacityGraph, Connection, Role, Side, SlotState, score_graph

L, R = Side.LEFT, Side.RIGHT


def test_connect_occupies_mouth_and_ear_slots():
    graph = CapacityGraph()
    graph.connect(Connection(1, L, 2, R))

    assert graph.slots(1) == SlotState(mouth_left=2)
    assert graph.slots(2) == SlotState(ear_right=1)
    assert graph.slots(3) == SlotState()
    assert graph.connection_count() == 1
    assert graph.ear_count() == 1


def test_connecting_twice_is_rejected():
    graph = CapacityGraph()
    c = Connection(1, L, 2, L)
    assert graph.is_feasible(c)
    graph.connect(c)

    assert not graph.is_feasible(c)
    with pytest.raises(CapacityError):
        graph.connect(c)
    assert graph.connection_count() == 1


def test_mouth_slot_holds_one_listener():
    graph = CapacityGraph()
    graph.connect(Connection(1, L, 2, L))

    assert not graph.is_feasible(Connection(1, L, 3, L))
    assert graph.is_feasible(Connection(1, R, 3, L))


def test_ear_slot_holds_one_speaker():
    graph = CapacityGraph()
    graph.connect(Connection(1, L, 3, L))

    assert not graph.is_feasible(Connection(2, L, 3, L))
    assert graph.is_feasible(Connection(2, L, 3, R))


def test_second_link_between_same_pair_is_rejected():
    graph = CapacityGraph()
    graph.connect(Connection(1, L, 2, L))

    assert not graph.is_feasible(Connection(1, R, 2, R))
    assert 'already connected' in graph.infeasibility(Connection(1, R, 2, R))


def test_reciprocal_link_depends_on_policy():
    strict = CapacityGraph()
    strict.connect(Connection(1, L, 2, L))
    assert not strict.is_feasible(Connection(2, L, 1, L))

    relaxed = CapacityGraph(allow_reciprocal=True)
    relaxed.connect(Connection(1, L, 2, L))
    assert relaxed.is_feasible(Connection(2, L, 1, L))
    relaxed.connect(Connection(2, L, 1, L))
    assert relaxed.connection_count() == 2
    # still no second link in the same direction
    assert not relaxed.is_feasible(Connection(1, R, 2, R))


def test_self_connection_is_never_feasible():
    graph = CapacityGraph(allow_reciprocal=True)
    assert not graph.is_feasible(Connection(1, L, 1, R))
    with pytest.raises(CapacityError):
        graph.connect(Connection(1, L, 1, R))


def test_failed_connect_leaves_graph_untouched():
    graph = CapacityGraph()
    graph.connect(Connection(1, L, 2, L))
    before = graph.connections()
    with pytest.raises(CapacityError) as exc:
        graph.connect(Connection(3, L, 2, L))
    assert 'ear left slot of performer 2' in str(exc.value)
    assert graph.connections() == before
    assert graph.slots(3) == SlotState()


@pytest.mark.parametrize('allow_reciprocal', [False, True])
def test_count_matches_successful_connects(allow_reciprocal):
    graph = CapacityGraph(allow_reciprocal=allow_reciprocal)
    calls = 0
    for source, source_side, sink, sink_side in product(range(1, 5), (L, R), range(1, 5), (L, R)):
        candidate = Connection(source, source_side, sink, sink_side)
        if graph.is_feasible(candidate):
            graph.connect(candidate)
            calls += 1

    assert calls > 0
    assert graph.connection_count() == calls
    assert graph.ear_count() == calls
    assert score_graph(graph) == calls
    assert len(graph.connections()) == calls
    for pid in range(1, 5):
        state = graph.slots(pid)
        assert state.occupied(Role.MOUTH) <= 2
        assert state.occupied(Role.EAR) <= 2


def test_connections_are_reconstructed_from_slots():
    graph = CapacityGraph()
    graph.connect(Connection(2, R, 1, L))
    graph.connect(Connection(1, L, 3, R))
    graph.connect(Connection(2, L, 3, L))

    assert graph.connections() == [
        Connection(1, L, 3, R),
        Connection(2, L, 3, L),
        Connection(2, R, 1, L),
    ]
    assert list(graph) == graph.connections()
    assert graph.performer_ids() == [1, 2, 3]
    assert graph.peers(3) == [2, 1]
    assert graph.peers(1) == [3, 2]


def test_slots_and_copy_are_independent():
    graph = CapacityGraph()
    graph.connect(Connection(1, L, 2, L))

    snapshot = graph.slots(1)
    snapshot.mouth_right = 9
    assert graph.slots(1).mouth_right is None

    clone = graph.copy()
    clone.connect(Connection(1, R, 3, L))
    assert clone.connection_count() == 2
    assert graph.connection_count() == 1


def test_slot_state_refuses_overwrite():
    state = SlotState()
    state.occupy(Role.EAR, L, 4)
    with pytest.raises(CapacityError):
        state.occupy(Role.EAR, L, 5)
    assert state.get(Role.EAR, L) == 4
    assert state.holds(4)
    assert not state.holds(4, Role.MOUTH)


def test_score_rejects_inconsistent_accounting():
    graph = CapacityGraph()
    graph.connect(Connection(1, L, 2, L))
    graph._slots[3] = SlotState(mouth_left=4)

    with pytest.raises(CapacityError) as exc:
        score_graph(graph)
    assert 'mismatch' in str(exc.value)


def test_empty_graph_scores_zero():
    graph = CapacityGraph()
    assert score_graph(graph) == 0
    assert graph.connections() == []
    assert 'connections=0' in repr(graph)
