"""
기본 스케줄링 알고리즘 구현 (비선점형)
- FCFS (First-Come, First-Served)
- SJF (Shortest Job First)
"""

from typing import List
from core.process import Process
from core.scheduler_base import BaseScheduler, Discipline, DEFAULT_DISPATCH_MODE


class FCFSScheduler(BaseScheduler):
    """
    FCFS (First-Come, First-Served) 스케줄러
    비선점형: 먼저 도착한 프로세스를 먼저 처리
    """

    discipline = Discipline.FCFS

    def __init__(self, processes: List[Process], mode=DEFAULT_DISPATCH_MODE):
        super().__init__(processes, "FCFS", mode)

    def sort_key(self, process: Process) -> int:
        """도착 시간 오름차순"""
        return process.arrival_time


class SJFScheduler(BaseScheduler):
    """
    SJF (Shortest Job First) 스케줄러
    비선점형: 버스트 시간이 가장 짧은 프로세스를 먼저 처리
    한 번 시작한 프로세스는 더 짧은 작업이 도착해도 끝까지 실행
    """

    discipline = Discipline.SJF

    def __init__(self, processes: List[Process], mode=DEFAULT_DISPATCH_MODE):
        super().__init__(processes, "SJF", mode)

    def sort_key(self, process: Process) -> int:
        """버스트 시간 오름차순"""
        return process.burst_time
