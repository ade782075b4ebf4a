import pytest

from core.process import Process, ProcessSet
from core.scheduler_base import Discipline, DispatchMode, IDLE_PID
from schedulers import (compute_schedule, create_scheduler, FCFSScheduler,
                        SJFScheduler, PriorityScheduler)


def _proc(pid, arrival_time, burst_time, priority=1):
    return Process(pid, f"P{pid}", arrival_time, burst_time, priority)


def _spans(timeline):
    return [(p.name, p.start_time, p.completion_time) for p in timeline]


def _assert_valid_timeline(processes, timeline):
    assert len(timeline) == len(processes)
    for p in timeline:
        assert p.completion_time == p.start_time + p.burst_time
        assert p.waiting_time == p.turnaround_time - p.burst_time
        assert p.waiting_time == p.start_time - p.arrival_time
        assert p.waiting_time >= 0
    for prev, cur in zip(timeline, timeline[1:]):
        assert prev.start_time < cur.start_time
        assert prev.completion_time <= cur.start_time


def test_fcfs_reference_set(reference_processes):
    timeline, metrics = compute_schedule(reference_processes, Discipline.FCFS)
    assert _spans(timeline) == [("P1", 0, 6), ("P3", 6, 15), ("P4", 15, 20), ("P2", 20, 24)]
    assert metrics.avg_waiting_time == 7.5
    assert metrics.avg_turnaround_time == 13.5


def test_sjf_reference_set_idles_until_arrival(reference_processes):
    timeline, metrics = compute_schedule(reference_processes, "sjf")
    assert _spans(timeline) == [("P2", 7, 11), ("P4", 11, 16), ("P1", 16, 22), ("P3", 22, 31)]
    assert [p.waiting_time for p in timeline] == [0, 8, 16, 21]
    assert metrics.avg_waiting_time == 11.25
    assert metrics.avg_turnaround_time == 17.25


def test_priority_order_follows_priority_value(reference_processes):
    timeline, _ = compute_schedule(reference_processes, "Priority")
    assert [p.name for p in timeline] == ["P2", "P4", "P1", "P3"]
    assert [p.priority for p in timeline] == [1, 2, 3, 4]
    _assert_valid_timeline(reference_processes, timeline)


@pytest.mark.parametrize("discipline", list(Discipline))
def test_timeline_invariants(discipline):
    processes = [_proc(1, 0, 3, 2), _proc(2, 10, 2, 1), _proc(3, 4, 6, 3),
                 _proc(4, 5, 1, 1), _proc(5, 30, 4, 5)]
    for mode in DispatchMode:
        timeline, _ = compute_schedule(processes, discipline, mode)
        _assert_valid_timeline(processes, timeline)


def test_empty_set_reports_absent_metrics():
    for discipline in Discipline:
        timeline, metrics = compute_schedule([], discipline)
        assert timeline == []
        assert metrics is None


def test_engine_does_not_mutate_input(reference_processes):
    before = [p.to_dict() for p in reference_processes]
    compute_schedule(reference_processes, Discipline.SJF)
    assert [p.to_dict() for p in reference_processes] == before
    assert not hasattr(reference_processes[0], "start_time")


def test_repeated_runs_are_identical(reference_processes):
    first = compute_schedule(reference_processes, Discipline.PRIORITY)
    second = compute_schedule(reference_processes, Discipline.PRIORITY)
    assert first == second


def test_ties_broken_by_pid():
    processes = [_proc(3, 0, 5), _proc(1, 0, 5), _proc(2, 0, 5)]
    for discipline in Discipline:
        timeline, _ = compute_schedule(processes, discipline)
        assert [p.pid for p in timeline] == [1, 2, 3]


def test_sjf_ready_queue_mode_selects_among_arrived(reference_processes):
    timeline, metrics = compute_schedule(reference_processes, Discipline.SJF,
                                         DispatchMode.READY_QUEUE)
    assert _spans(timeline) == [("P1", 0, 6), ("P4", 6, 11), ("P2", 11, 15), ("P3", 15, 24)]
    assert metrics.avg_waiting_time == 5.25


def test_ready_queue_mode_idles_when_nothing_arrived():
    processes = [_proc(1, 2, 3), _proc(2, 20, 1)]
    timeline, _ = compute_schedule(processes, "fcfs", "ready_queue")
    assert _spans(timeline) == [("P1", 2, 5), ("P2", 20, 21)]


def test_fcfs_same_in_both_modes(reference_processes):
    static = compute_schedule(reference_processes, Discipline.FCFS, DispatchMode.STATIC)
    dynamic = compute_schedule(reference_processes, Discipline.FCFS, DispatchMode.READY_QUEUE)
    assert static == dynamic


def test_unknown_discipline_rejected(reference_processes):
    with pytest.raises(ValueError):
        compute_schedule(reference_processes, "round_robin")


def test_gantt_chart_includes_idle_gap(reference_processes):
    result = SJFScheduler(reference_processes).run()
    gantt = result['gantt_chart']
    assert gantt[0].pid == IDLE_PID
    assert (gantt[0].start_time, gantt[0].end_time) == (0, 7)
    assert [e.name for e in gantt[1:]] == ["P2", "P4", "P1", "P3"]
    assert result['statistics']['idle_time'] == 7
    assert result['statistics']['cpu_busy_time'] == 24
    assert result['statistics']['total_simulation_time'] == 31


def test_statistics_for_empty_run():
    stats = FCFSScheduler([]).run()['statistics']
    assert stats['avg_waiting_time'] is None
    assert stats['avg_turnaround_time'] is None
    assert stats['cpu_utilization'] is None


def test_run_result_shape(reference_processes):
    result = PriorityScheduler(reference_processes).run()
    assert result['algorithm'] == "Priority"
    assert result['discipline'] is Discipline.PRIORITY
    assert result['mode'] is DispatchMode.STATIC
    assert result['statistics']['cpu_utilization'] == pytest.approx(24 / 31 * 100)
    assert result['event_log'][0].startswith("[T=  0] =====")
    assert any("P2 → Terminated (WT=0, TT=4)" in line for line in result['event_log'])


def test_verbose_prints_event_log(reference_processes, capsys):
    FCFSScheduler(reference_processes).run(verbose=True)
    out = capsys.readouterr().out
    assert "P1 → Running" in out
    assert "FCFS Scheduling Completed" in out


def test_edit_then_rerun_sjf_uses_new_value():
    process_set = ProcessSet()
    assert process_set.set_burst_time(3, 1)
    timeline, _ = compute_schedule(process_set.snapshot(), Discipline.SJF)
    assert timeline[0].name == "P3"
    assert timeline[0].burst_time == 1


def test_create_scheduler_picks_class(reference_processes):
    assert isinstance(create_scheduler(reference_processes, "fcfs"), FCFSScheduler)
    assert isinstance(create_scheduler(reference_processes, Discipline.SJF), SJFScheduler)
    assert isinstance(create_scheduler(reference_processes, "PRIORITY"), PriorityScheduler)
