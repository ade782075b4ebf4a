from core.comparison import ComparisonBoard
from core.process import ProcessSet
from core.scheduler_base import Discipline, Metrics, calculate_metrics
from schedulers import compute_schedule


def test_unrun_disciplines_are_absent():
    board = ComparisonBoard()
    comparison = board.get_comparison()
    assert list(comparison) == [Discipline.FCFS, Discipline.SJF, Discipline.PRIORITY]
    assert all(m is None for m in comparison.values())
    assert board.to_dict() == {"fcfs": None, "sjf": None, "priority": None}


def test_record_and_overwrite():
    board = ComparisonBoard()
    board.record_comparison("sjf", Metrics(1.0, 2.0))
    board.record_comparison(Discipline.SJF, Metrics(3.0, 4.0))
    assert board.get_comparison()[Discipline.SJF] == Metrics(3.0, 4.0)
    assert board.has_result("sjf")
    assert not board.has_result("fcfs")


def test_rerun_after_edit_replaces_entry():
    process_set = ProcessSet()
    board = ComparisonBoard()

    _, before = compute_schedule(process_set.snapshot(), Discipline.SJF)
    board.record_comparison(Discipline.SJF, before)

    process_set.set_burst_time(1, 1)
    _, after = compute_schedule(process_set.snapshot(), Discipline.SJF)
    board.record_comparison(Discipline.SJF, after)

    assert after != before
    assert board.get_comparison()[Discipline.SJF] is after
    assert board.get_comparison()[Discipline.FCFS] is None


def test_empty_run_recorded_as_absent():
    board = ComparisonBoard()
    board.record_comparison(Discipline.FCFS, Metrics(1.0, 1.0))
    board.record_comparison(Discipline.FCFS, calculate_metrics([]))
    assert board.get_comparison()[Discipline.FCFS] is None


def test_clear():
    board = ComparisonBoard()
    board.record_comparison("priority", Metrics(1.0, 2.0))
    board.clear()
    assert board.to_dict()["priority"] is None
