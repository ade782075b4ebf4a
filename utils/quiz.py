"""
스케줄링 개념 퀴즈
"""

import random
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class QuizQuestion:
    question: str
    options: Tuple[str, ...]
    answer: str

    def to_dict(self, include_answer: bool = False) -> Dict:
        data = {'question': self.question, 'options': list(self.options)}
        if include_answer:
            data['answer'] = self.answer
        return data


QUESTION_POOL = (
    QuizQuestion('Which algorithm can suffer from the "convoy effect"?',
                 ('SJF', 'FCFS', 'Priority'), 'FCFS'),
    QuizQuestion('Which non-preemptive algorithm is optimal for minimizing average waiting time?',
                 ('SJF', 'FCFS', 'Round Robin'), 'SJF'),
    QuizQuestion('What is a potential problem with Priority Scheduling?',
                 ('Convoy Effect', 'Starvation', 'High Throughput'), 'Starvation'),
    QuizQuestion('The time a process spends waiting in the ready queue is called:',
                 ('Turnaround Time', 'Burst Time', 'Waiting Time'), 'Waiting Time'),
    QuizQuestion('FCFS scheduling is a...',
                 ('Preemptive algorithm', 'Non-preemptive algorithm', 'Hybrid algorithm'),
                 'Non-preemptive algorithm'),
    QuizQuestion('If two processes in a priority queue have the same priority, '
                 'which algorithm is typically used?',
                 ('SJF', 'FCFS', 'Random'), 'FCFS'),
)

DEFAULT_QUESTION_COUNT = 3


def draw_questions(count: int = DEFAULT_QUESTION_COUNT,
                   rng: Optional[random.Random] = None) -> List[QuizQuestion]:
    """문제 풀에서 중복 없이 count개 추출"""
    rng = rng or random.Random()
    count = max(0, min(count, len(QUESTION_POOL)))
    return rng.sample(list(QUESTION_POOL), count)


def score_answers(questions: Sequence[QuizQuestion],
                  answers: Mapping[int, Optional[str]]) -> Dict:
    """
    답안 채점

    Args:
        questions: 출제된 문제 목록
        answers: 문제 번호(0부터) → 선택한 보기 (미응답은 누락 또는 None)

    Returns:
        {'score', 'total', 'results': [{'question', 'answer', 'given', 'correct'}]}
    """
    results = []
    for index, question in enumerate(questions):
        given = answers.get(index)
        results.append({
            'question': question.question,
            'answer': question.answer,
            'given': given,
            'correct': given == question.answer,
        })

    return {
        'score': sum(1 for r in results if r['correct']),
        'total': len(questions),
        'results': results,
    }


def find_question(text: str) -> Optional[QuizQuestion]:
    for question in QUESTION_POOL:
        if question.question == text:
            return question
    return None
