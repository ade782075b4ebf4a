"""
우선순위 스케줄링 알고리즘 구현 (비선점형)
"""

from typing import List
from core.process import Process
from core.scheduler_base import BaseScheduler, Discipline, DEFAULT_DISPATCH_MODE


class PriorityScheduler(BaseScheduler):
    """
    우선순위 스케줄러 (정적 우선순위)
    비선점형: 낮은 우선순위 값이 높은 우선순위
    """

    discipline = Discipline.PRIORITY

    def __init__(self, processes: List[Process], mode=DEFAULT_DISPATCH_MODE):
        super().__init__(processes, "Priority", mode)

    def sort_key(self, process: Process) -> int:
        # 숫자가 낮을수록 높은 우선순위
        return process.priority
