"""
프로세스 및 프로세스 집합 관리 모듈
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence


class InvalidInputError(ValueError):
    """잘못된 프로세스 입력 (음수 도착 시간, 0 이하의 버스트 시간 등)"""


def _as_int(value, field: str) -> int:
    """정수 변환. bool 및 소수부가 있는 값은 거부"""
    if isinstance(value, bool):
        raise InvalidInputError(f"{field}: 정수가 아닙니다: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInputError(f"{field}: 정수가 아닙니다: {value!r}")
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise InvalidInputError(f"{field}: 숫자 변환 오류: {value!r}")
    raise InvalidInputError(f"{field}: 지원하지 않는 타입: {type(value).__name__}")


class Process:
    """
    프로세스 레코드
    식별 정보(pid, name)는 생성 후 변경할 수 없고,
    스케줄링 속성(burst_time, priority)은 ProcessSet을 통해서만 수정한다.
    """

    __slots__ = ('_pid', '_name', 'arrival_time', 'burst_time', 'priority', 'color')

    def __init__(self, pid: int, name: str, arrival_time: int, burst_time: int,
                 priority: int, color: str = "#9ca3af"):
        """
        프로세스 초기화

        Args:
            pid: 프로세스 ID (고유)
            name: 표시 이름
            arrival_time: 도착 시간 (0 이상)
            burst_time: CPU 버스트 시간 (양수)
            priority: 우선순위 (낮을수록 높은 우선순위)
            color: 차트 표시 색상
        """
        self._pid = _as_int(pid, "pid")
        self._name = str(name)
        self.arrival_time = _as_int(arrival_time, "arrival_time")
        self.burst_time = _as_int(burst_time, "burst_time")
        self.priority = _as_int(priority, "priority")
        self.color = color

        if self.arrival_time < 0:
            raise InvalidInputError(f"도착 시간은 0 이상이어야 합니다: {self.arrival_time}")
        if self.burst_time <= 0:
            raise InvalidInputError(f"버스트 시간은 양수여야 합니다: {self.burst_time}")

    @property
    def pid(self) -> int:
        return self._pid

    @property
    def name(self) -> str:
        return self._name

    def to_dict(self) -> Dict:
        return {
            'pid': self.pid,
            'name': self.name,
            'arrival_time': self.arrival_time,
            'burst_time': self.burst_time,
            'priority': self.priority,
            'color': self.color,
        }

    def __repr__(self):
        return f"{self.name}[AT={self.arrival_time}, BT={self.burst_time}, PR={self.priority}]"

    def __str__(self):
        return f"Process {self.pid} ({self.name}): Arrival={self.arrival_time}, " \
               f"Burst={self.burst_time}, Priority={self.priority}"


@dataclass(frozen=True)
class ScheduledProcess:
    """
    한 번의 시뮬레이션 실행 결과 레코드
    원본 프로세스 속성 + 이번 실행에서 계산된 시간 정보
    """
    pid: int
    name: str
    arrival_time: int
    burst_time: int
    priority: int
    color: str
    start_time: int
    completion_time: int
    turnaround_time: int
    waiting_time: int

    @classmethod
    def from_process(cls, process: Process, start_time: int) -> 'ScheduledProcess':
        """start_time 기준으로 완료/반환/대기 시간 계산"""
        completion_time = start_time + process.burst_time
        turnaround_time = completion_time - process.arrival_time
        return cls(
            pid=process.pid,
            name=process.name,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            priority=process.priority,
            color=process.color,
            start_time=start_time,
            completion_time=completion_time,
            turnaround_time=turnaround_time,
            waiting_time=turnaround_time - process.burst_time,
        )

    def to_dict(self) -> Dict:
        return {
            'pid': self.pid,
            'name': self.name,
            'arrival_time': self.arrival_time,
            'burst_time': self.burst_time,
            'priority': self.priority,
            'color': self.color,
            'start_time': self.start_time,
            'completion_time': self.completion_time,
            'turnaround_time': self.turnaround_time,
            'waiting_time': self.waiting_time,
        }


# 기본 시나리오 (pid, name, arrival, burst, priority, color)
SEED_PROCESSES = (
    (1, 'P1', 0, 6, 3, '#3b82f6'),
    (2, 'P2', 7, 4, 1, '#22c55e'),
    (3, 'P3', 1, 9, 4, '#f97316'),
    (4, 'P4', 3, 5, 2, '#a855f7'),
)


def create_seed_processes() -> List[Process]:
    return [Process(*row) for row in SEED_PROCESSES]


def create_process_copy(process: Process) -> Process:
    """
    프로세스 복사본 생성
    각 스케줄링 알고리즘 시뮬레이션을 독립적으로 수행하기 위함
    """
    return Process(process.pid, process.name, process.arrival_time,
                   process.burst_time, process.priority, process.color)


class ProcessSet:
    """
    시뮬레이션 입력이 되는 프로세스 집합
    순서를 유지하며, 버스트 시간과 우선순위 수정만 허용한다.
    """

    def __init__(self, processes: Optional[Sequence[Process]] = None):
        if processes is None:
            processes = create_seed_processes()
        self._processes: List[Process] = []
        self._index: Dict[int, Process] = {}
        for process in processes:
            if process.pid in self._index:
                raise InvalidInputError(f"중복된 PID: {process.pid}")
            self._processes.append(process)
            self._index[process.pid] = process

    def __len__(self) -> int:
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(self._processes)

    def __contains__(self, pid: int) -> bool:
        return pid in self._index

    def get(self, pid: int) -> Optional[Process]:
        return self._index.get(pid)

    def snapshot(self) -> List[Process]:
        """현재 값의 복사본 리스트 (스케줄러 입력용)"""
        return [create_process_copy(p) for p in self._processes]

    def set_burst_time(self, pid: int, value) -> bool:
        """
        버스트 시간 수정

        Returns:
            적용 여부 (존재하지 않는 PID, 숫자가 아닌 값, 0 이하의 값은 무시)
        """
        process = self._index.get(pid)
        if process is None:
            return False
        try:
            burst_time = _as_int(value, "burst_time")
        except InvalidInputError:
            return False
        if burst_time <= 0:
            return False
        process.burst_time = burst_time
        return True

    def set_priority(self, pid: int, value) -> bool:
        """
        우선순위 수정

        Returns:
            적용 여부 (존재하지 않는 PID, 숫자가 아닌 값, 0 이하의 값은 무시)
        """
        process = self._index.get(pid)
        if process is None:
            return False
        try:
            priority = _as_int(value, "priority")
        except InvalidInputError:
            return False
        # 편집 폼의 최소값(1)과 동일한 규칙
        if priority <= 0:
            return False
        process.priority = priority
        return True

    def to_list(self) -> List[Dict]:
        return [p.to_dict() for p in self._processes]
