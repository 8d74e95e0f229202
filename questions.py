"""
The Extreme Secret Santa question set and the obfuscated lock code.

Everything here is built and validated at import time: a multiple choice
question whose answer is not among its options stops the server from starting.
"""
from typing import Any, Dict, Iterable, Tuple

from models import Question


class QuestionBankError(ValueError):
    """Question data is inconsistent (e.g. two questions share an id)."""


def build_question_bank(entries: Iterable[Dict[str, Any]]) -> Tuple[Question, ...]:
    """
    Validate raw question entries and number them.

    Entries without an explicit ``id`` are numbered 1..N in declaration order.
    Raises pydantic.ValidationError for a malformed question and
    QuestionBankError for duplicate ids.
    """
    questions = []
    seen = set()
    for position, entry in enumerate(entries, start=1):
        question = Question(**{"id": position, **entry})
        if question.id in seen:
            raise QuestionBankError(f"Duplicate question id {question.id}")
        seen.add(question.id)
        questions.append(question)
    return tuple(questions)


QUESTION_DATA = [
    {
        "text": "What roller coaster is closest to an establishment that offers green milk on its menu?",
        "answer_kind": "open_response",
        "correct_answer": "Slinky Dog Dash",
    },
    {
        "text": (
            "In the World Showcase, a piece of artwork can be found on the side of a building "
            "featuring a diety; among the various names this diety goes by, which is the longest "
            "uninterrupted by whitespace (according to Wikipedia)?"
        ),
        "answer_kind": "open_response",
        "correct_answer": "Tlahuizcalpantecuhtli",
    },
    {
        "text": "Which hotel has this courtyard?",
        "answer_kind": "multiple_choice",
        "options": [
            "Port Orleans - Riverside",
            "Port Orleans - French Quarter",
            "Art of Animation",
            "Coronado Sprints",
        ],
        "correct_answer": "Port Orleans - French Quarter",
        "image": "images/french_quarter.png",
    },
    {
        "text": "At what golf course hole number can you find the west-most Mickey Mouse-Shaped sand pit?",
        "answer_kind": "open_response",
        "correct_answer": "6",
        "image": "images/mickey_mouse_sand_trap.png",
    },
    {
        "text": (
            "Approximately how much area is covered by the visitor parking lots just north of "
            "Epicot? (Not including lots for buses.)"
        ),
        "answer_kind": "multiple_choice",
        "options": ["320329 m^2", "230932 m^2", "1142009 m^2", "11420 m^2"],
        "correct_answer": "320329 m^2",
    },
    {
        "text": (
            "According to the only 1-star review on Google Reviews of the Mickey Mouse-shaped "
            "solar farm, what should Disney have done instead?"
        ),
        "answer_kind": "multiple_choice",
        "options": [
            "Build a subcritical coal power plant",
            "Extract enenrgy from roller coasters using regenerative braking",
            "Build solar panels over the parking lots to minimize additional land use",
            "Build a rectangular solar farm, because no one cares about the aerial view of a solar farm",
        ],
        "correct_answer": "Build solar panels over the parking lots to minimize additional land use",
        "image": "images/solar_farm.jpg",
    },
    {
        "text": (
            "If you were to demolish the Epicot Sphere and build a circular solar farm in its "
            "footprint, what annual energy intensity would you achieve? (Hint: use shademap.app)"
        ),
        "answer_kind": "multiple_choice",
        "options": ["345 kWh/m^2", "435 kWh/m^2", "565 kWh/m^2", "655 kWh/m^2"],
        "correct_answer": "565 kWh/m^2",
    },
    {
        "text": "If C-3PO hobbles along at 2mph, how many hours would it take him to walk around the hourglass lake?",
        "answer_kind": "multiple_choice",
        "options": ["0.42", "0.63", "0.72", "0.95"],
        "correct_answer": "0.63",
        "image": "images/hourglass_lake.png",
    },
    {
        "text": "What is the name of the open-source scripting language Disney developed?",
        "answer_kind": "open_response",
        "correct_answer": "Groovity",
    },
    {
        "text": "At which hotel can you find giant Duncan's Yo-Yo Tops?",
        "answer_kind": "multiple_choice",
        "options": ["All-Star Movies", "All-Star Music", "All-Star Sports", "Pop Century"],
        "correct_answer": "Pop Century",
    },
]

QUESTIONS = build_question_bank(QUESTION_DATA)

# Combination lock code, XOR-obfuscated (see obf.py / the obfuscate CLI)
OBFUSCATED_SECRET = "06.1;.04"
