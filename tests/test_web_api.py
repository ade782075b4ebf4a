import pytest
from fastapi.testclient import TestClient

from web.backend.app import app

client = TestClient(app)


@pytest.fixture(autouse=True)
def reset_session():
    client.post("/processes/reset")
    yield
    client.post("/processes/reset")


def test_algorithms():
    response = client.get("/algorithms")
    assert response.status_code == 200
    ids = [a["id"] for a in response.json()["algorithms"]]
    assert ids == ["fcfs", "sjf", "priority"]
    assert not any(a["preemptive"] for a in response.json()["algorithms"])


def test_get_processes():
    processes = client.get("/processes").json()["processes"]
    assert [p["name"] for p in processes] == ["P1", "P2", "P3", "P4"]


def test_simulate_fcfs_records_comparison():
    response = client.post("/simulate/fcfs")
    assert response.status_code == 200
    body = response.json()
    result = body["result"]

    assert [p["name"] for p in result["timeline"]] == ["P1", "P3", "P4", "P2"]
    assert result["metrics"] == {"avg_waiting_time": 7.5, "avg_turnaround_time": 13.5}
    assert body["comparison"]["fcfs"]["avg_waiting_time"] == 7.5
    assert body["comparison"]["sjf"] is None

    comparison = client.get("/comparison").json()["comparison"]
    assert comparison["fcfs"]["avg_turnaround_time"] == 13.5
    assert comparison["priority"] is None


def test_simulate_ready_queue_mode():
    result = client.post("/simulate/sjf", params={"mode": "ready_queue"}).json()["result"]
    assert result["mode"] == "ready_queue"
    assert [p["name"] for p in result["timeline"]] == ["P1", "P4", "P2", "P3"]


def test_unknown_algorithm():
    assert client.post("/simulate/round_robin").status_code == 404


def test_edit_then_rerun_replaces_comparison():
    first = client.post("/simulate/sjf").json()["comparison"]["sjf"]

    response = client.patch("/processes/1", json={"burst_time": 1})
    assert response.json()["applied"] == {"burst_time": True}
    assert response.json()["process"]["burst_time"] == 1

    second = client.post("/simulate/sjf").json()
    assert second["result"]["timeline"][0]["name"] == "P1"
    assert second["comparison"]["sjf"] != first
    assert client.get("/comparison").json()["comparison"]["sjf"] == second["comparison"]["sjf"]


def test_invalid_edit_is_ignored():
    response = client.patch("/processes/2", json={"burst_time": 0, "priority": "abc"})
    assert response.status_code == 200
    assert response.json()["applied"] == {"burst_time": False, "priority": False}
    assert response.json()["process"]["burst_time"] == 4
    assert response.json()["process"]["priority"] == 1


def test_edit_unknown_process():
    assert client.patch("/processes/42", json={"priority": 2}).status_code == 404


def test_reset_clears_comparison():
    client.post("/simulate/priority")
    client.patch("/processes/3", json={"priority": 9})
    client.post("/processes/reset")

    assert client.get("/comparison").json()["comparison"]["priority"] is None
    processes = client.get("/processes").json()["processes"]
    assert processes[2]["priority"] == 4


def test_simulate_adhoc_processes_leaves_session_untouched():
    response = client.post("/simulate", json={
        "processes": [
            {"pid": 1, "arrival_time": 0, "burst_time": 3, "priority": 2},
            {"pid": 2, "arrival_time": 6, "burst_time": 2, "priority": 1},
        ],
        "algorithms": ["fcfs", "priority"],
    })
    assert response.status_code == 200
    body = response.json()
    assert len(body["results"]) == 2
    fcfs = body["results"][0]
    assert [(e["pid"], e["start_time"], e["end_time"]) for e in fcfs["gantt_chart"]] == [
        (1, 0, 3), (-1, 3, 6), (2, 6, 8)]
    assert body["comparison"]["sjf"] is None
    assert client.get("/comparison").json()["comparison"]["fcfs"] is None


def test_simulate_empty_processes_reports_absent_metrics():
    body = client.post("/simulate", json={"processes": [], "algorithms": ["sjf"]}).json()
    assert body["results"][0]["timeline"] == []
    assert body["results"][0]["metrics"] is None
    assert body["comparison"]["sjf"] is None


def test_simulate_validation_errors():
    bad_burst = {"processes": [{"pid": 1, "arrival_time": 0, "burst_time": 0, "priority": 1}]}
    assert client.post("/simulate", json=bad_burst).status_code == 422

    duplicate = {"processes": [
        {"pid": 1, "arrival_time": 0, "burst_time": 1, "priority": 1},
        {"pid": 1, "arrival_time": 2, "burst_time": 1, "priority": 1},
    ]}
    assert client.post("/simulate", json=duplicate).status_code == 400

    assert client.post("/simulate", json={"algorithms": ["rr"]}).status_code == 400


def test_quiz_roundtrip():
    questions = client.get("/quiz", params={"count": 2}).json()["questions"]
    assert len(questions) == 2
    assert all("answer" not in q for q in questions)

    answers = [{"question": q["question"], "given": q["options"][0]} for q in questions]
    report = client.post("/quiz/submit", json={"answers": answers}).json()
    assert report["total"] == 2
    assert 0 <= report["score"] <= 2


def test_quiz_unknown_question():
    response = client.post("/quiz/submit", json={"answers": [{"question": "?", "given": "x"}]})
    assert response.status_code == 400


def test_replay_websocket():
    with client.websocket_connect("/ws/replay") as websocket:
        websocket.send_json({"action": "init", "algorithm": "sjf"})
        assert websocket.receive_json()["type"] == "initialized"

        websocket.send_json({"action": "run", "speed": 0})
        frames = []
        while True:
            frame = websocket.receive_json()
            frames.append(frame)
            if frame["complete"]:
                break

    assert len(frames) == 5
    assert [f["segment"]["name"] for f in frames[:-1]] == ["P2", "P4", "P1", "P3"]
    assert [f["process"]["name"] for f in frames[:-1]] == ["P2", "P4", "P1", "P3"]
    assert [f["completed"] for f in frames[:-1]] == [1, 2, 3, 4]
    assert frames[0]["idle_before"] == {
        "pid": -1, "name": "Idle", "start_time": 0, "end_time": 7,
        "color": frames[0]["idle_before"]["color"]}
    assert frames[0]["segment"]["start_time"] == 7
    assert all(f["idle_before"] is None for f in frames[1:-1])
    assert frames[-1]["metrics"]["avg_waiting_time"] == 11.25


def test_replay_step_by_step():
    with client.websocket_connect("/ws/replay") as websocket:
        websocket.send_json({"action": "init", "algorithm": "fcfs"})
        assert websocket.receive_json()["process_count"] == 4

        websocket.send_json({"action": "step"})
        first = websocket.receive_json()
        assert first["process"]["name"] == "P1"
        assert first["idle_before"] is None
        assert first["current_time"] == 6


def test_replay_requires_init():
    with client.websocket_connect("/ws/replay") as websocket:
        websocket.send_json({"action": "step"})
        assert websocket.receive_json()["type"] == "error"
        websocket.send_json({"action": "init", "algorithm": "lottery"})
        assert websocket.receive_json()["type"] == "error"


def test_replay_rejects_bad_speed_and_non_object_messages():
    with client.websocket_connect("/ws/replay") as websocket:
        websocket.send_json({"action": "init", "algorithm": "sjf"})
        assert websocket.receive_json()["type"] == "initialized"

        websocket.send_json({"action": "run", "speed": "fast"})
        assert websocket.receive_json()["type"] == "error"

        websocket.send_json([1, 2])
        assert websocket.receive_json()["type"] == "error"

        websocket.send_json({"action": "step"})
        frame = websocket.receive_json()
        assert frame["type"] == "step_result"
        assert frame["process"]["name"] == "P2"
