"""
CPU Scheduling Algorithms
"""

from typing import Iterable, List, Optional, Tuple

from core.process import Process, ScheduledProcess
from core.scheduler_base import Discipline, DispatchMode, Metrics, DEFAULT_DISPATCH_MODE
from .basic_schedulers import FCFSScheduler, SJFScheduler
from .advanced_schedulers import PriorityScheduler


# 알고리즘 매핑
ALGORITHM_MAP = {
    Discipline.FCFS: {'name': 'FCFS (First-Come, First-Served)', 'class': FCFSScheduler},
    Discipline.SJF: {'name': 'SJF (Shortest Job First)', 'class': SJFScheduler},
    Discipline.PRIORITY: {'name': 'Priority Scheduling', 'class': PriorityScheduler},
}


def create_scheduler(processes: Iterable[Process], discipline,
                     mode=DEFAULT_DISPATCH_MODE):
    """기법에 맞는 스케줄러 인스턴스 생성"""
    algo_info = ALGORITHM_MAP[Discipline.parse(discipline)]
    return algo_info['class'](list(processes), mode=DispatchMode(mode))


def compute_schedule(processes: Iterable[Process], discipline,
                     mode=DEFAULT_DISPATCH_MODE
                     ) -> Tuple[List[ScheduledProcess], Optional[Metrics]]:
    """
    스케줄 계산

    Args:
        processes: 프로세스 목록 (변경되지 않음)
        discipline: Discipline 또는 'fcfs' / 'sjf' / 'priority'
        mode: 디스패치 방식

    Returns:
        (타임라인, Metrics) - 프로세스가 없으면 ([], None)
    """
    result = create_scheduler(processes, discipline, mode).run()
    return result['timeline'], result['metrics']


__all__ = [
    'ALGORITHM_MAP',
    'create_scheduler',
    'compute_schedule',
    'FCFSScheduler',
    'SJFScheduler',
    'PriorityScheduler'
]
