import pytest

from keen.client.selection import ChartMode, Selection, SelectionStateMachine

COMPANIES = ["INFY", "TCS", "WIPRO"]
METRICS = ["SALES", "EBITDA", "PAT"]


@pytest.fixture
def dispatched():
    return []


@pytest.fixture
def machine(dispatched):
    return SelectionStateMachine(COMPANIES, METRICS, dispatched.append)


def test_initial_state_dispatches_one_query(machine, dispatched):
    assert machine.selection == Selection("INFY", "SALES", ChartMode.AREA, version=1)
    assert dispatched == [machine.selection]


def test_autostart_can_be_deferred(dispatched):
    machine = SelectionStateMachine(COMPANIES, METRICS, dispatched.append, autostart=False)
    assert dispatched == []
    machine.start()
    machine.start()
    assert len(dispatched) == 1


def test_company_change_dispatches_once(machine, dispatched):
    selection = machine.set_company("TCS")
    assert selection.company == "TCS"
    assert selection.version == 2
    assert dispatched[-1] == selection
    assert len(dispatched) == 2


def test_metric_change_dispatches_once(machine, dispatched):
    machine.set_metric("PAT")
    assert [s.metric for s in dispatched] == ["SALES", "PAT"]


def test_normalized_equal_change_does_not_dispatch(machine, dispatched):
    selection = machine.set_company(" infy ")
    assert selection.version == 1
    assert len(dispatched) == 1


def test_chart_mode_never_dispatches(machine, dispatched):
    selection = machine.set_chart_mode("composed")
    assert selection.chart_mode is ChartMode.COMPOSED
    assert selection.version == 1
    machine.set_chart_mode(ChartMode.AREA)
    assert len(dispatched) == 1


def test_invalid_chart_mode(machine):
    with pytest.raises(ValueError):
        machine.set_chart_mode("pie")


def test_chart_mode_survives_query_changes(machine):
    machine.set_chart_mode("composed")
    assert machine.set_metric("PAT").chart_mode is ChartMode.COMPOSED


def test_stale_versions_are_rejected(machine):
    first = machine.selection.version
    machine.set_company("TCS")
    machine.set_metric("PAT")
    assert not machine.accept(first)
    assert not machine.accept(first + 1)
    assert machine.accept(machine.version)


def test_selections_are_immutable(machine):
    before = machine.selection
    machine.set_company("WIPRO")
    assert before.company == "INFY"
    with pytest.raises(Exception):
        before.company = "TCS"


def test_incomplete_selection_invalidates_without_dispatch(machine, dispatched):
    selection = machine.set_company("")
    assert selection.version == 2
    assert len(dispatched) == 1
    assert not machine.accept(1)


def test_requires_known_universe():
    with pytest.raises(ValueError):
        SelectionStateMachine([], METRICS, lambda s: None)
