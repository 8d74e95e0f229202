from __future__ import annotations

import re

import config
from models import Question
from quiz_server import create_app
from quiz_state import INCOMPLETE_MESSAGE


def open_session(client) -> str:
    response = client.get(config.QUIZ_ROUTE)
    assert response.status_code == 200
    return re.search(r'data-session-id="([0-9a-f]+)"', response.get_data(as_text=True)).group(1)


def test_root_redirects_to_quiz(client):
    response = client.get("/")
    assert response.status_code == 302
    assert response.headers["Location"].endswith(config.QUIZ_ROUTE)


def test_page_renders_questions_and_locked_banner(client):
    html = client.get(config.QUIZ_ROUTE).get_data(as_text=True)
    assert "1. What is the capital of France?" in html
    assert "2. Which planet is closest to the sun?" in html
    assert 'data-answer="Mercury"' in html
    assert 'class="open-response"' in html
    assert INCOMPLETE_MESSAGE in html
    assert "12-34-56" not in html


def test_each_page_load_is_a_new_session(client):
    assert open_session(client) != open_session(client)


def test_submissions_unlock_the_code(client):
    session_id = open_session(client)

    response = client.post("/submit", json={"session_id": session_id, "question_id": 1, "answer": " paris "})
    assert response.status_code == 200
    status = response.get_json()
    assert status == {"complete": False, "message": INCOMPLETE_MESSAGE, "answered": 1, "total": 2}

    response = client.post("/submit", json={"session_id": session_id, "question_id": 2, "answer": "Mercury"})
    status = response.get_json()
    assert status["complete"] is True
    assert status["message"].endswith("12-34-56")

    status = client.get(f"/status/{session_id}").get_json()
    assert status["complete"] is True
    assert status["answered"] == 2


def test_sessions_do_not_share_answers(client):
    first = open_session(client)
    second = open_session(client)
    client.post("/submit", json={"session_id": first, "question_id": 1, "answer": "Paris"})
    assert client.get(f"/status/{second}").get_json()["answered"] == 0


def test_malformed_submission_is_422(client):
    session_id = open_session(client)
    response = client.post("/submit", json={"session_id": session_id, "question_id": 1})
    assert response.status_code == 422
    assert response.get_json()["errors"][0]["loc"] == ["answer"]

    response = client.post("/submit", data="not json", content_type="text/plain")
    assert response.status_code == 422


def test_unknown_session_or_question_is_404(client):
    response = client.post("/submit", json={"session_id": "nope", "question_id": 1, "answer": "Paris"})
    assert response.status_code == 404

    session_id = open_session(client)
    response = client.post("/submit", json={"session_id": session_id, "question_id": 42, "answer": "x"})
    assert response.status_code == 404
    assert client.get("/status/nope").status_code == 404


def test_oldest_sessions_are_evicted(app, client):
    ids = [open_session(client) for _ in range(4)]
    assert len(app.config["QUIZ_SESSIONS"]) == 3
    assert client.get(f"/status/{ids[0]}").status_code == 404
    assert client.get(f"/status/{ids[-1]}").status_code == 200


def test_late_older_keystroke_does_not_overwrite_newer_answer(client):
    session_id = open_session(client)
    client.post("/submit", json={"session_id": session_id, "question_id": 2, "answer": "Mercury", "seq": 1})

    newer = client.post("/submit", json={"session_id": session_id, "question_id": 1, "answer": "Paris", "seq": 5})
    assert newer.get_json()["complete"] is True

    # "Pari" was typed first but its request arrives last
    older = client.post("/submit", json={"session_id": session_id, "question_id": 1, "answer": "Pari", "seq": 4})
    assert older.status_code == 200
    assert older.get_json()["complete"] is True
    assert client.get(f"/status/{session_id}").get_json()["complete"] is True


def test_sequence_numbers_are_tracked_per_question(client):
    session_id = open_session(client)
    client.post("/submit", json={"session_id": session_id, "question_id": 1, "answer": "Paris", "seq": 3})
    # A low counter on another question still applies
    status = client.post("/submit", json={"session_id": session_id, "question_id": 2, "answer": "Mercury", "seq": 1})
    assert status.get_json()["complete"] is True


def test_negative_sequence_number_is_422(client):
    session_id = open_session(client)
    response = client.post("/submit", json={"session_id": session_id, "question_id": 1, "answer": "x", "seq": -1})
    assert response.status_code == 422


def test_page_script_serialises_submissions(client):
    html = client.get(config.QUIZ_ROUTE).get_data(as_text=True)
    assert "pending = pending.then(" in html
    assert "seq: sequence[questionId]" in html


def test_question_images_point_at_assets():
    pictured = Question(id=1, text="Which hotel?", answer_kind="open_response",
                        correct_answer="Pop Century", image="images/french_quarter.png")
    html = create_app(questions=(pictured,)).test_client().get(config.QUIZ_ROUTE).get_data(as_text=True)
    assert 'src="/assets/images/french_quarter.png"' in html
    assert 'alt="Image for question 1"' in html
