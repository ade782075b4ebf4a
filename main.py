#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CPU 스케줄링 시뮬레이터 - 메인 실행 파일
FCFS / SJF / Priority 비선점형 스케줄링 비교
"""

import sys
import os

# 모듈 임포트
from core.process import ProcessSet, create_process_copy
from core.comparison import ComparisonBoard
from core.scheduler_base import Discipline
from schedulers import ALGORITHM_MAP, create_scheduler
from utils.input_parser import InputParser
from utils.visualization import Visualizer, format_metric
from utils.quiz import draw_questions, score_answers


OUTPUT_DIR = "simulation_results"
DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")

# 메뉴 번호 → 알고리즘
ALGORITHMS = {
    '1': Discipline.FCFS,
    '2': Discipline.SJF,
    '3': Discipline.PRIORITY,
}

MENU_ACTIONS = {'1', '2', '3', 'all', 'b', 'p', 'c', 's', 'q', 'r', '0'}


def print_banner():
    """배너 출력"""
    print("\n" + "="*60)
    print(" "*15 + "CPU 스케줄링 시뮬레이터")
    print("="*60 + "\n")


def print_algorithm_menu():
    """메뉴 출력"""
    print("\n" + "="*60)
    print("메뉴")
    print("="*60)
    print("\n[스케줄링 실행]")
    for key, discipline in ALGORITHMS.items():
        print(f"  {key}. {ALGORITHM_MAP[discipline]['name']}")
    print("  all. 모든 알고리즘 실행")
    print("\n[프로세스 수정]")
    print("  b. 버스트 시간 수정 (SJF 실험용)")
    print("  p. 우선순위 수정 (Priority 실험용)")
    print("  r. 프로세스 초기화")
    print("\n[결과]")
    print("  c. 비교 표 보기")
    print("  s. 차트 및 결과 저장")
    print("  q. 퀴즈")
    print("  0. 종료")
    print("="*60)


def get_user_choice():
    """사용자 선택 입력"""
    while True:
        choice = input("\n선택하세요: ").strip().lower()

        if choice in MENU_ACTIONS:
            return choice

        print("[오류] 잘못된 선택입니다. 다시 시도하세요.")


def run_single_algorithm(discipline, process_set, board, results, verbose=True):
    """단일 알고리즘 실행 후 비교 기록 갱신"""
    discipline = Discipline.parse(discipline)
    algo_info = ALGORITHM_MAP[discipline]

    print(f"\n{'='*60}")
    print(f"실행 중: {algo_info['name']}")
    print(f"{'='*60}\n")

    scheduler = create_scheduler(process_set.snapshot(), discipline)
    result = scheduler.run(verbose=verbose)

    board.record_comparison(discipline, result['metrics'])
    results[discipline] = result

    Visualizer().print_process_details(result)
    return result


def run_all_algorithms(process_set, board, results, verbose=False):
    """모든 알고리즘 실행"""
    print("\n" + "="*60)
    print("모든 스케줄링 알고리즘 실행")
    print("="*60 + "\n")

    for index, discipline in enumerate(ALGORITHMS.values(), 1):
        print(f"[{index}/{len(ALGORITHMS)}] {ALGORITHM_MAP[discipline]['name']} 실행 중...")
        run_single_algorithm(discipline, process_set, board, results, verbose=verbose)

    Visualizer().print_statistics_table(board.get_comparison())


def edit_process(process_set, field):
    """
    버스트 시간 또는 우선순위 수정
    잘못된 값은 무시하고 기존 값을 유지
    """
    label = "버스트 시간" if field == 'burst_time' else "우선순위"
    InputParser.print_process_summary(list(process_set))

    pid_text = input("수정할 PID: ").strip()
    value_text = input(f"새 {label}: ").strip()

    try:
        pid = int(pid_text)
    except ValueError:
        print("[오류] 잘못된 PID입니다. 변경하지 않았습니다.")
        return False

    if field == 'burst_time':
        applied = process_set.set_burst_time(pid, value_text)
    else:
        applied = process_set.set_priority(pid, value_text)

    if applied:
        print(f"[완료] P{pid}의 {label}을(를) {value_text}(으)로 변경했습니다")
    else:
        print(f"[오류] 잘못된 입력입니다. {label}은(는) 양의 정수여야 합니다. 변경하지 않았습니다.")
    return applied


def run_quiz(count=3):
    """퀴즈 진행"""
    questions = draw_questions(count)
    answers = {}

    print("\n" + "="*60)
    print("퀴즈")
    print("="*60)

    for index, question in enumerate(questions):
        print(f"\n{index + 1}. {question.question}")
        for opt_index, option in enumerate(question.options, 1):
            print(f"   {opt_index}) {option}")

        choice = input("답 (번호): ").strip()
        try:
            opt = int(choice)
            if 1 <= opt <= len(question.options):
                answers[index] = question.options[opt - 1]
        except ValueError:
            pass

    report = score_answers(questions, answers)
    print(f"\n점수: {report['score']} / {report['total']}")
    for index, item in enumerate(report['results'], 1):
        mark = "O" if item['correct'] else "X"
        print(f"  {index}. [{mark}] 정답: {item['answer']}")
    return report


def save_results(results, board, output_dir=OUTPUT_DIR):
    """결과 저장"""
    if not results:
        print("[오류] 저장할 결과가 없습니다. 먼저 알고리즘을 실행하세요.")
        return

    os.makedirs(output_dir, exist_ok=True)

    visualizer = Visualizer()
    visualizer.print_statistics_table(board.get_comparison())

    # Gantt Charts 생성
    print("Gantt 차트 생성 중...")
    for discipline, result in results.items():
        save_path = os.path.join(output_dir, f"gantt_{discipline.value}.png")
        visualizer.draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                    save_path=save_path, show=False)

    # 비교 그래프
    comparison_path = os.path.join(output_dir, "comparison.png")
    visualizer.compare_algorithms(board.get_comparison(), save_path=comparison_path, show=False)

    # 상세 결과 저장
    results_file = os.path.join(output_dir, "results.txt")
    save_results_to_file(results, board, results_file)

    print(f"\n결과가 '{output_dir}/' 디렉토리에 저장되었습니다")


def save_results_to_file(results, board, filename):
    """결과를 텍스트 파일로 저장"""
    with open(filename, 'w', encoding='utf-8') as f:
        f.write("="*80 + "\n")
        f.write("CPU 스케줄링 시뮬레이션 결과\n")
        f.write("="*80 + "\n\n")

        # 통계 비교
        f.write("성능 비교\n")
        f.write("-"*80 + "\n")
        f.write(f"{'알고리즘':<20} {'평균 대기':>15} {'평균 반환':>15}\n")
        f.write("-"*80 + "\n")

        for discipline, metrics in board.get_comparison().items():
            f.write(f"{discipline.label:<20} "
                    f"{format_metric(metrics.avg_waiting_time if metrics else None):>15} "
                    f"{format_metric(metrics.avg_turnaround_time if metrics else None):>15}\n")

        # 상세 결과
        for result in results.values():
            f.write("\n" + "="*80 + "\n")
            f.write(f"알고리즘: {result['algorithm']}\n")
            f.write("="*80 + "\n")
            f.write(f"{'이름':<6} {'도착':>6} {'버스트':>6} {'우선순위':>8} {'시작':>6} "
                    f"{'완료':>6} {'대기':>6} {'반환':>6}\n")
            f.write("-"*80 + "\n")

            for process in result['timeline']:
                f.write(f"{process.name:<6} "
                        f"{process.arrival_time:>6} "
                        f"{process.burst_time:>6} "
                        f"{process.priority:>8} "
                        f"{process.start_time:>6} "
                        f"{process.completion_time:>6} "
                        f"{process.waiting_time:>6} "
                        f"{process.turnaround_time:>6}\n")

    print(f"[완료] 결과가 {filename}에 저장되었습니다")


def select_input_file():
    """입력 데이터 선택"""
    print("\n" + "="*60)
    print("입력 데이터 선택")
    print("="*60)
    print("\n[입력 옵션]")
    print("  0. 기본 예제 (P1~P4)")
    print("  1. 랜덤 데이터 (자동 생성)")
    print("  2. 사용자 정의 데이터 (data/ 디렉토리에서 선택)")
    print("="*60)

    while True:
        choice = input("\n입력 옵션 선택 (0-2): ").strip()

        if choice == '0':
            return None

        elif choice == '1':
            return "GENERATE_RANDOM"

        elif choice == '2':
            files = []
            if os.path.isdir(DATA_DIR):
                files = sorted(f for f in os.listdir(DATA_DIR) if f.endswith('.txt'))
            if not files:
                print("[오류] data/ 디렉토리에 .txt 파일이 없습니다.")
                continue

            print("\n" + "-"*60)
            print("data/ 디렉토리의 사용 가능한 파일:")
            for i, file in enumerate(files, 1):
                print(f"  {i}. {file}")
            print("-"*60)

            file_choice = input("파일 번호 선택: ").strip()
            try:
                idx = int(file_choice) - 1
            except ValueError:
                print("[오류] 잘못된 입력입니다.")
                continue
            if 0 <= idx < len(files):
                return os.path.join(DATA_DIR, files[idx])
            print("[오류] 잘못된 파일 번호입니다.")

        else:
            print("[오류] 잘못된 선택입니다. 0, 1, 또는 2를 입력하세요.")


def load_process_set(source):
    """선택한 입력으로 프로세스 집합 생성"""
    if source is None:
        return ProcessSet()
    if source == "GENERATE_RANDOM":
        return ProcessSet(InputParser.generate_random_processes())

    print(f"\n'{source}'에서 프로세스 로딩 중...")
    return ProcessSet(InputParser.parse_file(source))


def restore_process_set(initial):
    """시작 시점 스냅샷으로 프로세스 집합 복원"""
    return ProcessSet([create_process_copy(p) for p in initial])


def main():
    """메인 함수"""
    print_banner()

    source = select_input_file()
    process_set = load_process_set(source)

    if len(process_set) == 0:
        print("\n[오류] 프로세스 로드 실패 또는 파일이 비어있습니다.")
        sys.exit(1)

    InputParser.print_process_summary(list(process_set))
    initial = process_set.snapshot()

    board = ComparisonBoard()
    results = {}

    while True:
        print_algorithm_menu()
        choice = get_user_choice()

        if choice == '0':
            print("\nCPU 스케줄링 시뮬레이터를 사용해 주셔서 감사합니다!")
            print("="*60 + "\n")
            break
        elif choice in ALGORITHMS:
            run_single_algorithm(ALGORITHMS[choice], process_set, board, results)
        elif choice == 'all':
            run_all_algorithms(process_set, board, results)
        elif choice == 'b':
            edit_process(process_set, 'burst_time')
        elif choice == 'p':
            edit_process(process_set, 'priority')
        elif choice == 'r':
            process_set = restore_process_set(initial)
            board.clear()
            results.clear()
            print("[완료] 프로세스와 비교 결과를 초기화했습니다")
        elif choice == 'c':
            Visualizer().print_statistics_table(board.get_comparison())
        elif choice == 's':
            save_results(results, board)
        elif choice == 'q':
            run_quiz()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n사용자에 의해 시뮬레이션이 중단되었습니다.")
        print("="*60 + "\n")
        sys.exit(0)
