from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import Optional, List, Literal

# --- Question Schema ---

AnswerKind = Literal["multiple_choice", "open_response"]


class Question(BaseModel):
    """
    A single quiz item. Instances are frozen: the question set is built once
    at startup and never mutated afterwards.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Stable identifier; questions are displayed in id order.")
    text: str = Field(min_length=1, description="Prompt shown on the question card.")
    answer_kind: AnswerKind
    options: List[str] = Field(
        default_factory=list,
        description="Choices presented verbatim as buttons (multiple choice only)."
    )
    correct_answer: str
    image: Optional[str] = Field(
        default=None,
        description="Path of an image under the static assets folder, e.g. 'images/solar_farm.jpg'."
    )

    @model_validator(mode="after")
    def check_answer_kind(self) -> "Question":
        if self.answer_kind == "multiple_choice":
            if not self.options:
                raise ValueError(f"Question {self.id}: multiple choice needs at least one option")
            if self.correct_answer not in self.options:
                raise ValueError(
                    f"Question {self.id}: correct answer {self.correct_answer!r} "
                    f"is not one of the options {self.options!r}"
                )
        elif self.options:
            raise ValueError(f"Question {self.id}: open response questions take no options")
        return self

    @property
    def is_multiple_choice(self) -> bool:
        return self.answer_kind == "multiple_choice"


# --- HTTP Payload Schemas ---

class AnswerSubmission(BaseModel):
    """
    Body of POST /submit, sent by the page on every input change or button press.
    """
    session_id: str = Field(min_length=1)
    question_id: int
    # Stored as typed; trimming/case folding only happens when grading
    answer: str
    seq: Optional[int] = Field(
        default=None, ge=0,
        description="Per-question counter from the page; a submission older than the last one applied is ignored."
    )


class QuizStatus(BaseModel):
    """
    What the status banner needs to re-render after a submission.
    """
    complete: bool
    message: str
    answered: int
    total: int
