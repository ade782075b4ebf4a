"""
입력 데이터 파서 및 프로세스 생성 모듈
"""

import csv
import random
from typing import List, Optional
from core.process import Process, InvalidInputError


# 랜덤 생성 시 사용할 색상 팔레트
DEFAULT_COLORS = ['#3b82f6', '#22c55e', '#f97316', '#a855f7',
                  '#ef4444', '#eab308', '#14b8a6', '#ec4899']


class InputParser:
    """입력 파일 파서"""

    @staticmethod
    def parse_file(filename: str) -> List[Process]:
        """
        CSV 파일에서 프로세스 정보 읽기

        파일 형식: PID,이름,도착시간,버스트시간,우선순위[,색상]
        예: 1,P1,0,6,3,#3b82f6

        Args:
            filename: 입력 파일 경로

        Returns:
            프로세스 리스트 (파일이 없으면 빈 리스트)
        """
        processes = []
        seen_pids = set()

        try:
            with open(filename, 'r', encoding='utf-8', newline='') as f:
                lines = (line for line in f
                         if line.strip() and not line.lstrip().startswith('#'))
                for parts in csv.reader(lines):
                    try:
                        process = InputParser.create_process_from_parts(parts)
                    except InvalidInputError as e:
                        print(f"경고: 라인 파싱 실패: {','.join(parts)}")
                        print(f"오류: {e}")
                        continue

                    if process.pid in seen_pids:
                        print(f"경고: 중복된 PID {process.pid} 무시")
                        continue
                    seen_pids.add(process.pid)
                    processes.append(process)

            print(f"{filename}에서 {len(processes)}개의 프로세스를 성공적으로 로드했습니다")
            return processes

        except FileNotFoundError:
            print(f"오류: 파일 '{filename}'을 찾을 수 없습니다")
            return []

    @staticmethod
    def create_process_from_parts(parts: List[str]) -> Process:
        """파싱된 부분에서 프로세스 객체 생성"""
        parts = [p.strip() for p in parts]
        if len(parts) < 5:
            raise InvalidInputError(f"잘못된 형식: 5개 필드가 필요하지만 {len(parts)}개만 있습니다")

        pid, name, arrival_time, burst_time, priority = parts[:5]
        if not name:
            name = f"P{pid}"

        if len(parts) > 5 and parts[5]:
            return Process(pid, name, arrival_time, burst_time, priority, parts[5])
        return Process(pid, name, arrival_time, burst_time, priority)

    @staticmethod
    def generate_random_processes(num_processes: int = 5,
                                  max_arrival: int = 10,
                                  max_burst: int = 10,
                                  max_priority: int = 5,
                                  seed: Optional[int] = None) -> List[Process]:
        """
        랜덤 프로세스 생성

        Args:
            num_processes: 생성할 프로세스 수
            max_arrival: 최대 도착 시간
            max_burst: 최대 CPU 버스트 시간
            max_priority: 최대 우선순위 값
            seed: 랜덤 시드

        Returns:
            프로세스 리스트
        """
        rng = random.Random(seed)
        processes = []

        for i in range(1, num_processes + 1):
            processes.append(Process(
                pid=i,
                name=f"P{i}",
                arrival_time=rng.randint(0, max_arrival),
                burst_time=rng.randint(1, max_burst),
                priority=rng.randint(1, max_priority),
                color=DEFAULT_COLORS[(i - 1) % len(DEFAULT_COLORS)],
            ))

        print(f"{num_processes}개의 랜덤 프로세스를 생성했습니다")
        return processes

    @staticmethod
    def save_processes_to_file(processes: List[Process], filename: str):
        """
        프로세스 리스트를 파일로 저장

        Args:
            processes: 저장할 프로세스 리스트
            filename: 출력 파일 경로
        """
        with open(filename, 'w', encoding='utf-8', newline='') as f:
            f.write("# CPU Scheduling Simulator Input Data\n")
            f.write("# Format: PID,Name,ArrivalTime,BurstTime,Priority,Color\n")

            writer = csv.writer(f, lineterminator='\n')
            for process in processes:
                writer.writerow([process.pid, process.name, process.arrival_time,
                                 process.burst_time, process.priority, process.color])

        print(f"{len(processes)}개의 프로세스를 {filename}에 성공적으로 저장했습니다")

    @staticmethod
    def print_process_summary(processes: List[Process]):
        """프로세스 요약 정보 출력"""
        print("\n" + "="*60)
        print("프로세스 요약")
        print("="*60)
        print(f"{'PID':<6} {'이름':<8} {'도착시간':>8} {'버스트':>8} {'우선순위':>10}")
        print("-"*60)

        for p in processes:
            print(f"{p.pid:<6} {p.name:<8} {p.arrival_time:>8} "
                  f"{p.burst_time:>8} {p.priority:>10}")

        print("="*60)
        print(f"전체 프로세스: {len(processes)}개\n")
