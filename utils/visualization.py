"""
시각화 모듈: Gantt Chart, 비교 그래프 및 결과 표 출력
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from typing import List, Dict, Optional
from core.scheduler_base import GanttEntry, Metrics, Discipline


def format_metric(value: Optional[float]) -> str:
    """평균 값 포맷 (값이 없으면 N/A)"""
    return f"{value:.2f}" if value is not None else "N/A"


class Visualizer:
    """스케줄링 결과 시각화"""

    def __init__(self):
        self.idle_color = '#CCCCCC'
        self.waiting_color = '#3b82f6'
        self.turnaround_color = '#22c55e'

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], algorithm_name: str,
                         save_path: str = None, show: bool = True) -> bool:
        """
        Gantt Chart 그리기 (단일 CPU 한 줄)

        Args:
            gantt_data: Gantt Chart 데이터
            algorithm_name: 알고리즘 이름
            save_path: 저장 경로 (None이면 저장 안 함)
            show: 화면에 표시할지 여부

        Returns:
            차트를 그렸는지 여부
        """
        if not gantt_data:
            print(f"{algorithm_name}에 대한 Gantt 차트 데이터가 없습니다")
            return False

        fig, ax = plt.subplots(figsize=(12, 2.5))

        for entry in gantt_data:
            duration = entry.end_time - entry.start_time
            color = self.idle_color if entry.is_idle else (entry.color or self.idle_color)
            ax.barh(0, duration, left=entry.start_time, height=0.6,
                    color=color, edgecolor='black', linewidth=0.8,
                    hatch='//' if entry.is_idle else None)

            if not entry.is_idle:
                ax.text(entry.start_time + duration/2, 0, entry.name,
                        ha='center', va='center', fontsize=10, fontweight='bold',
                        color='white')

        # 시작/종료 시각 눈금
        ticks = sorted({e.start_time for e in gantt_data} | {e.end_time for e in gantt_data})
        ax.set_xticks(ticks)
        ax.set_yticks([])
        ax.set_xlim(0, gantt_data[-1].end_time)
        ax.set_xlabel('Time', fontsize=11)
        ax.set_title(f'Gantt Chart - {algorithm_name}', fontsize=13, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        if any(entry.is_idle for entry in gantt_data):
            ax.legend(handles=[mpatches.Patch(facecolor=self.idle_color, hatch='//',
                                              label='CPU Idle')], loc='upper right')

        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Gantt 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)
        return True

    def compare_algorithms(self, comparison: Dict[Discipline, Optional[Metrics]],
                           save_path: str = None, show: bool = True) -> bool:
        """
        실행된 알고리즘의 평균 대기/반환 시간 비교 그래프
        실행 기록이 없는 알고리즘은 제외

        Args:
            comparison: ComparisonBoard.get_comparison() 결과
            save_path: 저장 경로
            show: 화면에 표시할지 여부
        """
        available = [(d, m) for d, m in comparison.items() if m is not None]
        if not available:
            print("비교할 결과가 없습니다")
            return False

        labels = [d.label for d, _ in available]
        waiting = [m.avg_waiting_time for _, m in available]
        turnaround = [m.avg_turnaround_time for _, m in available]
        positions = range(len(labels))
        width = 0.38

        fig, ax = plt.subplots(figsize=(8, 5))
        bars1 = ax.bar([x - width/2 for x in positions], waiting, width,
                       color=self.waiting_color, edgecolor='black', label='Avg. Waiting Time')
        bars2 = ax.bar([x + width/2 for x in positions], turnaround, width,
                       color=self.turnaround_color, edgecolor='black', label='Avg. Turnaround Time')

        # 값 표시
        for bar, value in list(zip(bars1, waiting)) + list(zip(bars2, turnaround)):
            ax.text(bar.get_x() + bar.get_width()/2., bar.get_height(),
                    f'{value:.2f}', ha='center', va='bottom', fontsize=9)

        ax.set_xticks(list(positions))
        ax.set_xticklabels(labels)
        ax.set_ylabel('Time', fontsize=11)
        ax.set_ylim(bottom=0)
        ax.set_title('Scheduling Algorithms Performance Comparison',
                     fontsize=13, fontweight='bold')
        ax.grid(axis='y', alpha=0.3)
        ax.legend()

        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"비교 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)
        return True

    def print_statistics_table(self, comparison: Dict[Discipline, Optional[Metrics]]):
        """
        기법별 통계를 표 형식으로 출력

        Args:
            comparison: ComparisonBoard.get_comparison() 결과
        """
        print("\n" + "="*60)
        print("스케줄링 알고리즘 성능 비교")
        print("="*60)
        print(f"{'알고리즘':<20} {'평균 대기':>15} {'평균 반환':>15}")
        print("-"*60)

        for discipline, metrics in comparison.items():
            print(f"{discipline.label:<20} "
                  f"{format_metric(metrics.avg_waiting_time if metrics else None):>15} "
                  f"{format_metric(metrics.avg_turnaround_time if metrics else None):>15}")

        print("="*60 + "\n")

    def print_process_details(self, results: Dict):
        """
        개별 프로세스의 상세 정보 출력

        Args:
            results: 알고리즘 실행 결과
        """
        print(f"\n{'='*80}")
        print(f"프로세스 상세 - {results['algorithm']}")
        print(f"{'='*80}")
        print(f"{'이름':<6} {'도착':>8} {'버스트':>8} {'우선순위':>10} {'시작':>8} "
              f"{'완료':>8} {'대기':>8} {'반환':>8}")
        print(f"{'-'*80}")

        for process in results['timeline']:
            print(f"{process.name:<6} "
                  f"{process.arrival_time:>8} "
                  f"{process.burst_time:>8} "
                  f"{process.priority:>10} "
                  f"{process.start_time:>8} "
                  f"{process.completion_time:>8} "
                  f"{process.waiting_time:>8} "
                  f"{process.turnaround_time:>8}")

        metrics = results['metrics']
        print(f"{'-'*80}")
        print(f"평균 대기 시간: {format_metric(metrics.avg_waiting_time if metrics else None)}  "
              f"평균 반환 시간: {format_metric(metrics.avg_turnaround_time if metrics else None)}")
        print(f"{'='*80}\n")
