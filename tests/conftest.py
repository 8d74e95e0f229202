from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep test runs from appending to the server's log file
os.environ.setdefault("LOG_FILE_PATH", str(Path(tempfile.gettempdir()) / "santa_quiz_tests.log"))

from models import Question  # noqa: E402
from obf import obfuscate  # noqa: E402
from quiz_server import create_app  # noqa: E402


@pytest.fixture
def capital_question():
    return Question(id=1, text="What is the capital of France?",
                    answer_kind="open_response", correct_answer="Paris")


@pytest.fixture
def planet_question():
    return Question(id=2, text="Which planet is closest to the sun?",
                    answer_kind="multiple_choice",
                    options=["Venus", "Mercury", "Mars"], correct_answer="Mercury")


@pytest.fixture
def sample_questions(capital_question, planet_question):
    return (capital_question, planet_question)


@pytest.fixture
def app(sample_questions):
    app = create_app(questions=sample_questions, obfuscated_secret=obfuscate("12-34-56"), max_sessions=3)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
