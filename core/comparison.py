"""
알고리즘별 성능 비교 기록
"""

from typing import Dict, Optional
from .scheduler_base import Discipline, Metrics


class ComparisonBoard:
    """
    기법별 가장 최근 실행 결과(Metrics) 보관
    다시 실행하면 해당 기법의 항목을 통째로 교체한다.
    """

    def __init__(self):
        self._results: Dict[Discipline, Optional[Metrics]] = {}

    def record_comparison(self, discipline, metrics: Optional[Metrics]):
        self._results[Discipline.parse(discipline)] = metrics

    def get_comparison(self) -> Dict[Discipline, Optional[Metrics]]:
        """세 기법 모두 포함 (실행한 적 없는 기법은 None)"""
        return {d: self._results.get(d) for d in Discipline}

    def has_result(self, discipline) -> bool:
        return self._results.get(Discipline.parse(discipline)) is not None

    def clear(self):
        self._results.clear()

    def to_dict(self) -> Dict[str, Optional[Dict]]:
        return {
            d.value: (m.to_dict() if m is not None else None)
            for d, m in self.get_comparison().items()
        }
