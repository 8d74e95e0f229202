"""
Answer tracking and grading for a single quiz page session.

AnswerStore holds the latest answer per question and notifies listeners
synchronously after every write, so the completion flag a QuizSession exposes
is always recomputed before the next submission is handled.
"""
import threading
from typing import Callable, Dict, List, Optional, Sequence

from logger import quiz_logger
from models import Question
from obf import deobfuscate

Listener = Callable[["AnswerStore"], None]

SUCCESS_MESSAGE = "🎉 The combination lock passcode is {secret}"
INCOMPLETE_MESSAGE = "Not all questions have been answered correctly"


class UnknownQuestionError(KeyError):
    """Raised when a submission names a question id that is not in the quiz."""


class AnswerStore:
    """In-memory mapping of question id -> last submitted answer."""

    def __init__(self):
        self._answers: Dict[int, str] = {}
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def submit(self, question_id: int, answer: str) -> None:
        # Unconditional overwrite; no validation at write time
        self._answers[question_id] = answer
        for listener in self._listeners:
            listener(self)

    def get(self, question_id: int) -> Optional[str]:
        return self._answers.get(question_id)

    def __contains__(self, question_id: int) -> bool:
        return question_id in self._answers

    def __len__(self) -> int:
        return len(self._answers)


def grade_answer(question: Question, answer: Optional[str]) -> bool:
    """
    Grade one submission against its question.

    Multiple choice answers come from buttons that send the option verbatim,
    so they must match exactly. Free-text answers are trimmed and compared
    case-insensitively. A missing answer is simply wrong.
    """
    if answer is None:
        return False
    if question.is_multiple_choice:
        return answer == question.correct_answer
    return answer.strip().casefold() == question.correct_answer.casefold()


def all_correct(questions: Sequence[Question], store: AnswerStore) -> bool:
    return all(grade_answer(q, store.get(q.id)) for q in questions)


def answered_count(questions: Sequence[Question], store: AnswerStore) -> int:
    return sum(1 for q in questions if q.id in store)


class QuizSession:
    """
    One page session: the (shared, immutable) question set plus its own store.

    Requests for the same session may arrive on different server threads;
    hold ``lock`` to read a status consistent with the last applied write.
    """

    def __init__(self, session_id: str, questions: Sequence[Question], obfuscated_secret: str):
        self.session_id = session_id
        self.questions = tuple(questions)
        self._by_id = {q.id: q for q in self.questions}
        self._secret = deobfuscate(obfuscated_secret)
        self.store = AnswerStore()
        self.lock = threading.RLock()
        self._last_seq: Dict[int, int] = {}
        self.complete = all_correct(self.questions, self.store)
        self.store.subscribe(self._recompute)

    def _recompute(self, store: AnswerStore) -> None:
        was_complete = self.complete
        self.complete = all_correct(self.questions, store)
        if self.complete and not was_complete:
            quiz_logger.info(f"Session {self.session_id}: all questions answered correctly")

    def submit(self, question_id: int, answer: str, seq: Optional[int] = None) -> bool:
        """
        Store an answer and return the recomputed completion flag.

        When ``seq`` is given, a submission that is not newer than the last one
        applied for the same question is dropped, so a late request cannot
        overwrite a newer answer.
        """
        if question_id not in self._by_id:
            raise UnknownQuestionError(question_id)
        with self.lock:
            if seq is not None:
                last = self._last_seq.get(question_id)
                if last is not None and seq <= last:
                    quiz_logger.debug(
                        f"Session {self.session_id}: dropped stale answer #{seq} for question {question_id}"
                    )
                    return self.complete
                self._last_seq[question_id] = seq
            self.store.submit(question_id, answer)
            return self.complete

    def answer_for(self, question_id: int) -> str:
        return self.store.get(question_id) or ""

    def answered(self) -> int:
        return answered_count(self.questions, self.store)

    def status_message(self) -> str:
        if self.complete:
            return SUCCESS_MESSAGE.format(secret=self._secret)
        return INCOMPLETE_MESSAGE
