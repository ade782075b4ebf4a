from core.comparison import ComparisonBoard
from core.scheduler_base import Discipline
from schedulers import SJFScheduler
from utils.visualization import Visualizer, format_metric


def test_format_metric():
    assert format_metric(7.5) == "7.50"
    assert format_metric(None) == "N/A"


def test_draw_gantt_chart_with_idle_gap(tmp_path, reference_processes):
    result = SJFScheduler(reference_processes).run()
    path = tmp_path / "gantt.png"

    drawn = Visualizer().draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                          save_path=str(path), show=False)
    assert drawn
    assert path.exists()


def test_draw_gantt_chart_without_data(tmp_path):
    assert not Visualizer().draw_gantt_chart([], "FCFS", save_path=str(tmp_path / "x.png"),
                                             show=False)
    assert not (tmp_path / "x.png").exists()


def test_compare_algorithms_skips_absent(tmp_path, reference_processes):
    board = ComparisonBoard()
    assert not Visualizer().compare_algorithms(board.get_comparison(), show=False)

    board.record_comparison(Discipline.SJF, SJFScheduler(reference_processes).run()['metrics'])
    path = tmp_path / "comparison.png"
    assert Visualizer().compare_algorithms(board.get_comparison(), save_path=str(path), show=False)
    assert path.exists()


def test_statistics_table_shows_not_available(capsys, reference_processes):
    board = ComparisonBoard()
    board.record_comparison(Discipline.SJF, SJFScheduler(reference_processes).run()['metrics'])
    Visualizer().print_statistics_table(board.get_comparison())

    lines = capsys.readouterr().out.splitlines()
    fcfs_line = next(line for line in lines if line.startswith("FCFS"))
    sjf_line = next(line for line in lines if line.startswith("SJF"))
    assert "N/A" in fcfs_line
    assert "11.25" in sjf_line and "17.25" in sjf_line
