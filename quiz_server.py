"""
Extreme Secret Santa Quiz Server
Renders the trivia page, records answers per page session and reveals the
combination lock code once every question is answered correctly.
"""

import threading
import uuid
from collections import OrderedDict
from typing import Optional, Sequence

from flask import Flask, request, jsonify, redirect, render_template_string
from flask_cors import CORS
from pydantic import ValidationError

import config
from logger import quiz_logger
from models import AnswerSubmission, Question, QuizStatus
from questions import OBFUSCATED_SECRET, QUESTIONS
from quiz_state import QuizSession, UnknownQuestionError


class SessionRegistry:
    """
    Live page sessions keyed by id. Every page load registers a new session,
    so a reload starts from an empty answer store.
    """

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        self._sessions = OrderedDict()
        self._lock = threading.Lock()

    def add(self, session: QuizSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                quiz_logger.info(f"Evicted oldest session {evicted_id}")

    def get(self, session_id: str) -> Optional[QuizSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


def build_status(session: QuizSession) -> QuizStatus:
    return QuizStatus(
        complete=session.complete,
        message=session.status_message(),
        answered=session.answered(),
        total=len(session.questions),
    )


# ============================================================================
# PAGE TEMPLATE
# ============================================================================

PAGE_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <title>Julia's Extreme Secret Santa Challenge!</title>
    <link rel="icon" href="data:image/svg+xml,<svg xmlns=%22http://www.w3.org/2000/svg%22 viewBox=%220 0 100 100%22><text y=%22.9em%22 font-size=%2290%22>🎅</text></svg>">
    <style>
        body { font-family: Arial, sans-serif; max-width: 1100px; margin: 40px auto; padding: 20px; }
        .column-container { display: flex; gap: 30px; }
        .left-column { width: 70%; }
        .right-column { width: 30%; }
        .question-card { background: #f8f9fa; padding: 15px; margin: 15px 0; border-radius: 5px; }
        .question-img { max-width: 100%; margin: 10px 0; }
        .choice-button { display: block; margin: 6px 0; padding: 8px 12px; cursor: pointer; }
        .choice-button.selected { background: #3498db; color: white; }
        .open-response { width: 100%; padding: 8px; }
        .success-or-failure-message { position: sticky; top: 20px; padding: 15px; border-radius: 5px; }
        .success { background: #d4edda; color: #155724; }
        .failure { background: #f8d7da; color: #721c24; }
    </style>
</head>
<body data-session-id="{{ quiz.session_id }}">
    <div class="container">
        <h1 class="title">Julia's Extreme Secret Santa Challenge!</h1>
        <p class="body">
            Use your extensive knowledge of and recent trip to Disney World to access the combination lock
            code and unlock your gift. You are welcome to use any internet resources you would like. Good luck!
        </p>
        <br>
        <div class="column-container">
            <div class="left-column">
                {% for question in quiz.questions %}
                <div class="question-card" data-question-id="{{ question.id }}">
                    <h3 class="question-text">{{ question.id }}. {{ question.text }}</h3>
                    {% if question.image %}
                    <img class="question-img" src="{{ url_for('static', filename=question.image) }}" alt="Image for question {{ question.id }}">
                    {% endif %}
                    <div class="answer-section">
                        {% if question.is_multiple_choice %}
                        <div class="multiple-choice">
                            {% for option in question.options %}
                            <button type="button"
                                    class="choice-button{% if quiz.answer_for(question.id) == option %} selected{% endif %}"
                                    data-answer="{{ option }}">{{ option }}</button>
                            {% endfor %}
                        </div>
                        {% else %}
                        <input class="open-response" type="text" value="{{ quiz.answer_for(question.id) }}">
                        {% endif %}
                    </div>
                </div>
                {% endfor %}
            </div>
            <div class="right-column">
                <div id="status"
                     class="success-or-failure-message {{ 'success' if quiz.complete else 'failure' }}">
                    {{ quiz.status_message() }}
                </div>
            </div>
        </div>
    </div>

    <script>
        const sessionId = document.body.dataset.sessionId;
        const banner = document.getElementById("status");

        // Submissions go out one at a time, in input order
        let pending = Promise.resolve();
        const sequence = {};

        function submitAnswer(questionId, answer) {
            sequence[questionId] = (sequence[questionId] || 0) + 1;
            const body = JSON.stringify({
                session_id: sessionId, question_id: questionId, answer: answer, seq: sequence[questionId]
            });
            pending = pending.then(() => postAnswer(body)).catch(() => {});
            return pending;
        }

        async function postAnswer(body) {
            const response = await fetch("{{ url_for('submit') }}", {
                method: "POST",
                headers: {"Content-Type": "application/json"},
                body: body
            });
            if (!response.ok) {
                return;
            }
            const status = await response.json();
            banner.textContent = status.message;
            banner.className = "success-or-failure-message " + (status.complete ? "success" : "failure");
        }

        for (const card of document.querySelectorAll(".question-card")) {
            const questionId = Number(card.dataset.questionId);
            for (const button of card.querySelectorAll(".choice-button")) {
                button.addEventListener("click", () => {
                    for (const other of card.querySelectorAll(".choice-button")) {
                        other.classList.toggle("selected", other === button);
                    }
                    submitAnswer(questionId, button.dataset.answer);
                });
            }
            const input = card.querySelector(".open-response");
            if (input) {
                input.addEventListener("input", () => submitAnswer(questionId, input.value));
            }
        }
    </script>
</body>
</html>
"""


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

def create_app(
    questions: Sequence[Question] = QUESTIONS,
    obfuscated_secret: str = OBFUSCATED_SECRET,
    max_sessions: int = config.QUIZ_MAX_SESSIONS,
) -> Flask:
    app = Flask(__name__, static_folder="assets", static_url_path="/assets")
    CORS(app)

    sessions = SessionRegistry(max_sessions)
    app.config["QUIZ_SESSIONS"] = sessions

    @app.route('/')
    def index():
        return redirect(config.QUIZ_ROUTE)

    @app.route(config.QUIZ_ROUTE)
    def quiz_page():
        """Each page load starts a new, empty answer session"""
        session = QuizSession(uuid.uuid4().hex, questions, obfuscated_secret)
        sessions.add(session)
        quiz_logger.info(f"New quiz session {session.session_id} ({len(sessions)} live)")
        return render_template_string(PAGE_TEMPLATE, quiz=session)

    @app.route('/submit', methods=['POST'])
    def submit():
        """Record one answer and return the recomputed status banner"""
        try:
            payload = AnswerSubmission.model_validate(request.get_json(silent=True))
        except ValidationError as e:
            quiz_logger.warning(f"Rejected malformed submission: {e.error_count()} error(s)")
            return jsonify({
                'message': 'Invalid submission',
                'errors': e.errors(include_url=False, include_context=False)
            }), 422

        session = sessions.get(payload.session_id)
        if session is None:
            quiz_logger.warning(f"Submission for unknown session {payload.session_id}")
            return jsonify({'message': 'Unknown session; reload the page'}), 404

        try:
            with session.lock:
                session.submit(payload.question_id, payload.answer, payload.seq)
                current = build_status(session)
        except UnknownQuestionError:
            quiz_logger.warning(
                f"Session {payload.session_id}: unknown question id {payload.question_id}"
            )
            return jsonify({'message': f'Unknown question {payload.question_id}'}), 404

        quiz_logger.debug(f"Session {payload.session_id}: answer recorded for question {payload.question_id}")
        return jsonify(current.model_dump())

    @app.route('/status/<session_id>')
    def status(session_id):
        session = sessions.get(session_id)
        if session is None:
            return jsonify({'message': 'Unknown session; reload the page'}), 404
        with session.lock:
            current = build_status(session)
        return jsonify(current.model_dump())

    return app


app = create_app()


def main():
    print("=" * 60)
    print("Extreme Secret Santa Quiz Server Starting...")
    print("=" * 60)
    print(f"\nServer will run on: http://{config.QUIZ_HOST}:{config.QUIZ_PORT}")
    print("\nOpen the quiz at:")
    print(f"  http://{config.QUIZ_HOST}:{config.QUIZ_PORT}{config.QUIZ_ROUTE}")
    print("\n" + "=" * 60)
    app.run(host=config.QUIZ_HOST, port=config.QUIZ_PORT, debug=config.QUIZ_DEBUG)


if __name__ == '__main__':
    main()
