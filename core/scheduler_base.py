"""
스케줄러 기본 프레임워크 및 통계 계산
"""

import heapq
from typing import List, Dict, Optional, Sequence
from dataclasses import dataclass
from enum import Enum
from .process import Process, ScheduledProcess, create_process_copy

# CPU 유휴 구간을 나타내는 특수 PID
IDLE_PID = -1


class Discipline(Enum):
    """스케줄링 기법 (모두 비선점형)"""
    FCFS = "fcfs"
    SJF = "sjf"
    PRIORITY = "priority"

    @property
    def label(self) -> str:
        return "Priority" if self is Discipline.PRIORITY else self.name

    @classmethod
    def parse(cls, value) -> 'Discipline':
        """Discipline 또는 문자열 ID(대소문자 무시)를 Discipline으로 변환"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown algorithm: {value}")


class DispatchMode(Enum):
    """
    디스패치 방식
    STATIC: 실행 전에 한 번 정렬한 순서대로 실행
    READY_QUEUE: 매 디스패치 시점마다 도착한 프로세스 중에서 선택
    """
    STATIC = "static"
    READY_QUEUE = "ready_queue"


DEFAULT_DISPATCH_MODE = DispatchMode.STATIC


@dataclass(frozen=True)
class GanttEntry:
    """Gantt Chart 엔트리"""
    pid: int
    name: str
    start_time: int
    end_time: int
    color: Optional[str] = None

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE_PID

    def to_dict(self) -> Dict:
        return {
            'pid': self.pid,
            'name': self.name,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'color': self.color,
        }


@dataclass(frozen=True)
class Metrics:
    """실행 결과 요약 (평균 대기 시간, 평균 반환 시간)"""
    avg_waiting_time: float
    avg_turnaround_time: float

    def to_dict(self) -> Dict:
        return {
            'avg_waiting_time': self.avg_waiting_time,
            'avg_turnaround_time': self.avg_turnaround_time,
        }


def calculate_metrics(timeline: Sequence[ScheduledProcess]) -> Optional[Metrics]:
    """
    타임라인의 평균 대기/반환 시간 계산

    Returns:
        Metrics, 타임라인이 비어 있으면 None (0으로 보고하지 않음)
    """
    if not timeline:
        return None

    count = len(timeline)
    return Metrics(
        avg_waiting_time=sum(p.waiting_time for p in timeline) / count,
        avg_turnaround_time=sum(p.turnaround_time for p in timeline) / count,
    )


class SchedulerStats:
    """스케줄링 통계"""

    def __init__(self):
        self.cpu_busy_time = 0
        self.idle_time = 0
        self.total_simulation_time = 0
        self.process_count = 0

    def calculate_averages(self, metrics: Optional[Metrics]) -> Dict:
        """평균 및 CPU 이용률 계산 (데이터가 없으면 None)"""
        return {
            'avg_waiting_time': metrics.avg_waiting_time if metrics else None,
            'avg_turnaround_time': metrics.avg_turnaround_time if metrics else None,
            'cpu_utilization': (self.cpu_busy_time / self.total_simulation_time * 100)
                               if self.total_simulation_time > 0 else None,
            'cpu_busy_time': self.cpu_busy_time,
            'idle_time': self.idle_time,
            'total_simulation_time': self.total_simulation_time,
            'process_count': self.process_count,
        }


class BaseScheduler:
    """
    기본 스케줄러 클래스
    모든 비선점형 스케줄링 알고리즘의 공통 기능 제공

    하위 클래스는 discipline과 sort_key()만 정의하면 된다.
    입력 프로세스는 복사해서 사용하므로 원본은 변경되지 않는다.
    """

    discipline: Discipline = None

    def __init__(self, processes: Sequence[Process], name: str = "Base Scheduler",
                 mode=DEFAULT_DISPATCH_MODE):
        self.processes = [create_process_copy(p) for p in processes]
        self.name = name
        self.mode = DispatchMode(mode)
        self.current_time = 0

        # 실행 결과
        self.timeline: List[ScheduledProcess] = []
        self.gantt_chart: List[GanttEntry] = []

        # 통계
        self.stats = SchedulerStats()

        # 이벤트 로그
        self.event_log: List[str] = []

    def sort_key(self, process: Process) -> int:
        """
        정렬 기준 값 (하위 클래스에서 구현)
        값이 작을수록 먼저 실행된다. 동일하면 PID 오름차순.
        """
        raise NotImplementedError("Subclasses must implement sort_key()")

    def order_queue(self) -> List[Process]:
        """실행 큐 구성 (시뮬레이션 전에 한 번만 정렬)"""
        return sorted(self.processes, key=lambda p: (self.sort_key(p), p.pid))

    def log_event(self, message: str):
        """이벤트 로그 기록"""
        log_entry = f"[T={self.current_time:3d}] {message}"
        self.event_log.append(log_entry)

    def add_to_gantt_chart(self, pid: int, name: str, start: int, end: int,
                           color: Optional[str] = None):
        """Gantt Chart에 엔트리 추가"""
        if start < end:  # 유효한 시간 구간만 추가
            self.gantt_chart.append(GanttEntry(pid, name, start, end, color))

    def idle_until(self, time: int):
        """다음 프로세스가 도착할 때까지 CPU 유휴"""
        if time <= self.current_time:
            return
        self.log_event(f"CPU idle until T={time}")
        self.add_to_gantt_chart(IDLE_PID, "Idle", self.current_time, time)
        self.stats.idle_time += time - self.current_time
        self.current_time = time

    def dispatch(self, process: Process) -> ScheduledProcess:
        """프로세스를 완료될 때까지 실행하고 결과 레코드 생성"""
        if self.current_time < process.arrival_time:
            self.idle_until(process.arrival_time)

        record = ScheduledProcess.from_process(process, self.current_time)
        self.log_event(f"{process.name} → Running")
        self.add_to_gantt_chart(process.pid, process.name, record.start_time,
                                record.completion_time, process.color)

        self.stats.cpu_busy_time += process.burst_time
        self.current_time = record.completion_time
        self.timeline.append(record)
        self.log_event(f"{process.name} → Terminated "
                       f"(WT={record.waiting_time}, TT={record.turnaround_time})")
        return record

    def run_static(self):
        """정렬된 큐 순서 그대로 실행"""
        for process in self.order_queue():
            self.dispatch(process)

    def run_ready_queue(self):
        """
        도착한 프로세스만 대상으로 매 디스패치 시점에 다음 프로세스 선택
        Ready 큐는 (정렬 기준, PID) 최소 힙
        """
        pending = sorted(self.processes, key=lambda p: (p.arrival_time, p.pid))
        ready = []
        index = 0

        while index < len(pending) or ready:
            if not ready and pending[index].arrival_time > self.current_time:
                self.idle_until(pending[index].arrival_time)

            while index < len(pending) and pending[index].arrival_time <= self.current_time:
                process = pending[index]
                heapq.heappush(ready, (self.sort_key(process), process.pid, process))
                self.log_event(f"{process.name} arrived → Ready Queue")
                index += 1

            _, _, process = heapq.heappop(ready)
            self.dispatch(process)

    def update_statistics(self):
        """최종 통계 업데이트"""
        self.stats.total_simulation_time = self.current_time
        self.stats.process_count = len(self.timeline)

    def run(self, verbose: bool = False) -> Dict:
        """
        스케줄링 시뮬레이션 실행

        Args:
            verbose: 상세 로그 출력 여부

        Returns:
            시뮬레이션 결과 딕셔너리
        """
        self.log_event(f"===== {self.name} Scheduling Started ({self.mode.value}) =====")

        if self.mode is DispatchMode.READY_QUEUE:
            self.run_ready_queue()
        else:
            self.run_static()

        self.log_event(f"===== {self.name} Scheduling Completed =====")

        if verbose:
            for log in self.event_log:
                print(log)

        return self.get_results()

    def get_results(self) -> Dict:
        """
        시뮬레이션 결과 반환

        Returns:
            결과 딕셔너리 (타임라인, 통계, Gantt Chart, 로그 등)
        """
        self.update_statistics()
        metrics = calculate_metrics(self.timeline)

        return {
            'algorithm': self.name,
            'discipline': self.discipline,
            'mode': self.mode,
            'timeline': list(self.timeline),
            'metrics': metrics,
            'statistics': self.stats.calculate_averages(metrics),
            'gantt_chart': list(self.gantt_chart),
            'event_log': list(self.event_log),
        }
