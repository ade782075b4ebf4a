"""
CPU 스케줄링 시뮬레이터 - FastAPI 백엔드
"""

from fastapi import FastAPI, HTTPException, Query, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Any, List, Optional, Dict
import asyncio
import logging

from core.process import Process, ProcessSet, InvalidInputError
from core.comparison import ComparisonBoard
from core.scheduler_base import Discipline, DispatchMode
from schedulers import ALGORITHM_MAP, create_scheduler
from utils.quiz import QUESTION_POOL, draw_questions, find_question, score_answers

logger = logging.getLogger(__name__)

app = FastAPI(
    title="CPU Scheduling Simulator",
    description="비선점형 CPU 스케줄링(FCFS, SJF, Priority) 시뮬레이터",
    version="1.0.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic 모델
class ProcessInput(BaseModel):
    pid: int
    name: Optional[str] = None
    arrival_time: int = Field(ge=0)
    burst_time: int = Field(gt=0)
    priority: int
    color: Optional[str] = None


class ProcessEdit(BaseModel):
    # 잘못된 값은 오류 없이 무시하므로 타입을 제한하지 않음
    burst_time: Optional[Any] = None
    priority: Optional[Any] = None


class SimulationRequest(BaseModel):
    processes: Optional[List[ProcessInput]] = None
    algorithms: List[str] = [d.value for d in Discipline]
    mode: DispatchMode = DispatchMode.STATIC


class QuizAnswer(BaseModel):
    question: str
    given: Optional[str] = None


class QuizSubmission(BaseModel):
    answers: List[QuizAnswer]


class SessionState:
    """세션 단위 프로세스 집합과 비교 결과"""

    def __init__(self):
        self.process_set = ProcessSet()
        self.board = ComparisonBoard()

    def reset(self):
        self.process_set = ProcessSet()
        self.board.clear()


session = SessionState()


def create_process_objects(process_inputs: List[ProcessInput]) -> List[Process]:
    """ProcessInput을 Process 객체로 변환"""
    processes = []
    for p in process_inputs:
        kwargs = {}
        if p.color:
            kwargs['color'] = p.color
        processes.append(Process(
            pid=p.pid,
            name=p.name or f"P{p.pid}",
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            priority=p.priority,
            **kwargs
        ))
    return processes


def parse_discipline(algorithm: str, status_code: int = 404) -> Discipline:
    try:
        return Discipline.parse(algorithm)
    except ValueError as e:
        raise HTTPException(status_code=status_code, detail=str(e))


def serialize_result(result: Dict) -> Dict:
    """스케줄러 결과를 JSON 직렬화 가능한 형태로 변환"""
    metrics = result['metrics']
    return {
        'algorithm': result['algorithm'],
        'discipline': result['discipline'].value,
        'mode': result['mode'].value,
        'timeline': [p.to_dict() for p in result['timeline']],
        'metrics': metrics.to_dict() if metrics is not None else None,
        'statistics': result['statistics'],
        'gantt_chart': [entry.to_dict() for entry in result['gantt_chart']],
        'event_log': result['event_log'],
    }


def run_scheduler(processes: List[Process], discipline: Discipline,
                  mode: DispatchMode = DispatchMode.STATIC) -> Dict:
    """스케줄러 실행 및 결과 반환"""
    scheduler = create_scheduler(processes, discipline, mode)
    return scheduler.run()


@app.get("/")
async def root():
    return {"message": "CPU Scheduling Simulator API", "version": "1.0.0"}


@app.get("/algorithms")
async def get_algorithms():
    """사용 가능한 알고리즘 목록 반환"""
    return {
        "algorithms": [
            {"id": d.value, "name": info['name'], "preemptive": False}
            for d, info in ALGORITHM_MAP.items()
        ],
        "modes": [m.value for m in DispatchMode],
    }


@app.get("/processes")
async def get_processes():
    return {"processes": session.process_set.to_list()}


@app.patch("/processes/{pid}")
async def edit_process(pid: int, edit: ProcessEdit):
    """
    버스트 시간/우선순위 수정
    잘못된 값은 무시하고 적용 여부만 반환
    """
    if pid not in session.process_set:
        raise HTTPException(status_code=404, detail=f"Unknown process: {pid}")

    applied = {}
    if edit.burst_time is not None:
        applied['burst_time'] = session.process_set.set_burst_time(pid, edit.burst_time)
    if edit.priority is not None:
        applied['priority'] = session.process_set.set_priority(pid, edit.priority)

    logger.info("Edit P%s: %s", pid, applied)
    return {"process": session.process_set.get(pid).to_dict(), "applied": applied}


@app.post("/processes/reset")
async def reset_processes():
    session.reset()
    logger.info("Session reset to seed processes")
    return {"processes": session.process_set.to_list()}


@app.post("/simulate/{algorithm}")
async def simulate_session(algorithm: str, mode: DispatchMode = DispatchMode.STATIC):
    """세션 프로세스 집합으로 실행하고 비교 결과 갱신"""
    discipline = parse_discipline(algorithm)
    result = run_scheduler(session.process_set.snapshot(), discipline, mode)
    session.board.record_comparison(discipline, result['metrics'])

    logger.info("Simulated %s (%s) on %d processes",
                discipline.label, mode.value, len(result['timeline']))
    return {"success": True, "result": serialize_result(result),
            "comparison": session.board.to_dict()}


@app.post("/simulate")
async def simulate(request: SimulationRequest):
    """
    여러 알고리즘 실행
    processes가 주어지면 세션과 무관하게 해당 프로세스로만 계산
    """
    disciplines = [parse_discipline(a, status_code=400) for a in request.algorithms]

    if request.processes is not None:
        try:
            process_set = ProcessSet(create_process_objects(request.processes))
        except InvalidInputError as e:
            raise HTTPException(status_code=400, detail=str(e))
        board = ComparisonBoard()
    else:
        process_set = session.process_set
        board = session.board

    results = []
    for discipline in disciplines:
        result = run_scheduler(process_set.snapshot(), discipline, request.mode)
        board.record_comparison(discipline, result['metrics'])
        results.append(serialize_result(result))

    logger.info("Simulated %s on %d processes",
                [d.value for d in disciplines], len(process_set))
    return {"success": True, "results": results, "comparison": board.to_dict()}


@app.get("/comparison")
async def get_comparison():
    return {"comparison": session.board.to_dict()}


@app.get("/quiz")
async def get_quiz(count: int = Query(3, ge=1, le=len(QUESTION_POOL))):
    """정답을 제외한 퀴즈 문제 반환"""
    return {"questions": [q.to_dict() for q in draw_questions(count)]}


@app.post("/quiz/submit")
async def submit_quiz(submission: QuizSubmission):
    questions = []
    answers = {}
    for index, item in enumerate(submission.answers):
        question = find_question(item.question)
        if question is None:
            raise HTTPException(status_code=400, detail=f"Unknown question: {item.question}")
        questions.append(question)
        answers[index] = item.given
    return score_answers(questions, answers)


# WebSocket을 통한 실행 과정 재생
class ReplaySession:
    """스케줄된 프로세스를 하나씩 전달 (직전 유휴 구간 포함)"""

    def __init__(self, processes: List[Process], discipline: Discipline,
                 mode: DispatchMode = DispatchMode.STATIC):
        self.result = run_scheduler(processes, discipline, mode)
        self.position = 0

    @property
    def is_complete(self) -> bool:
        return self.position >= len(self.result['timeline'])

    def find_segments(self, pid: int):
        """프로세스의 Gantt 구간과 바로 앞 유휴 구간 조회"""
        chart = self.result['gantt_chart']
        for index, entry in enumerate(chart):
            if entry.pid == pid:
                previous = chart[index - 1] if index > 0 else None
                idle = previous if previous is not None and previous.is_idle else None
                return entry, idle
        raise LookupError(f"No Gantt segment for process {pid}")

    def step(self) -> Dict:
        """한 프로세스 진행 및 상태 반환"""
        if self.is_complete:
            metrics = self.result['metrics']
            return {
                'complete': True,
                'metrics': metrics.to_dict() if metrics is not None else None,
                'statistics': self.result['statistics'],
            }

        process = self.result['timeline'][self.position]
        self.position += 1
        segment, idle = self.find_segments(process.pid)
        return {
            'complete': False,
            'process': process.to_dict(),
            'segment': segment.to_dict(),
            'idle_before': idle.to_dict() if idle is not None else None,
            'current_time': process.completion_time,
            'completed': self.position,
            'total': len(self.result['timeline']),
        }


@app.websocket("/ws/replay")
async def websocket_replay(websocket: WebSocket):
    """실행 과정 재생 WebSocket 엔드포인트"""
    await websocket.accept()
    replay = None

    try:
        while True:
            message = await websocket.receive_json()
            if not isinstance(message, dict):
                await websocket.send_json({'type': 'error', 'message': 'Message must be a JSON object'})
                continue
            action = message.get('action')

            if action == 'init':
                try:
                    discipline = Discipline.parse(message.get('algorithm'))
                    mode = DispatchMode(message.get('mode', DispatchMode.STATIC.value))
                except ValueError as e:
                    await websocket.send_json({'type': 'error', 'message': str(e)})
                    continue

                replay = ReplaySession(session.process_set.snapshot(), discipline, mode)
                await websocket.send_json({
                    'type': 'initialized',
                    'algorithm': discipline.value,
                    'process_count': len(replay.result['timeline'])
                })

            elif replay is None:
                await websocket.send_json({'type': 'error', 'message': 'Replay not initialized'})

            elif action == 'step':
                await websocket.send_json({'type': 'step_result', **replay.step()})

            elif action == 'run':
                # 자동 실행 (속도 조절 가능)
                try:
                    speed = float(message.get('speed', 1.0))
                except (TypeError, ValueError):
                    await websocket.send_json({'type': 'error', 'message': f"Invalid speed: {message.get('speed')!r}"})
                    continue
                delay = 1.0 / speed if speed > 0 else 0

                while True:
                    result = replay.step()
                    await websocket.send_json({'type': 'step_result', **result})
                    if result['complete']:
                        break
                    await asyncio.sleep(delay)

    except WebSocketDisconnect:
        logger.info("Replay client disconnected")


@app.get("/sample-processes")
async def get_sample_processes():
    """샘플 프로세스 데이터 반환"""
    return {
        "samples": [
            {
                "name": "기본 예제 (4개 프로세스)",
                "processes": ProcessSet().to_list()
            },
            {
                "name": "CPU 유휴 구간 포함",
                "processes": [
                    {"pid": 1, "name": "A", "arrival_time": 0, "burst_time": 3, "priority": 2},
                    {"pid": 2, "name": "B", "arrival_time": 6, "burst_time": 2, "priority": 1},
                    {"pid": 3, "name": "C", "arrival_time": 7, "burst_time": 4, "priority": 3}
                ]
            }
        ]
    }


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)
