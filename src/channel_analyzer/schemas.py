"""Pydantic schemas for the channel analysis pipeline."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Fixed question list; answer i of a completion belongs to QUESTIONS[i].
QUESTIONS: tuple[str, ...] = (
    "What type of channel is this?",
    "Is the content useful or a waste of time? Why?",
    "Summarize the common theme.",
    "How can the channel improve?",
    "How many videos are there in total?",
    "What is the average length?",
    "What is the average number of views?",
)


class ReferenceKind(str, Enum):
    """How a channel URL points at its channel."""

    ID = "id"
    HANDLE = "handle"
    USERNAME = "username"


class ChannelReference(BaseModel):
    """Classified, not yet resolved pointer to a channel.

    The kind tag selects how the value is turned into a channel ID:
    IDs are used as-is, handles go through channel search, and legacy
    usernames go through the forUsername lookup.
    """

    model_config = ConfigDict(frozen=True)

    kind: ReferenceKind
    value: str = Field(min_length=1)


class VideoRecord(BaseModel):
    """One video's content and engagement metadata."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    duration: str  # ISO 8601, e.g. "PT15M33S"
    view_count: str  # integer as returned by the statistics part


class Answer(BaseModel):
    """Answer to one of the fixed questions.

    ``text`` is None when the completion did not contain a segment for this
    question, which is different from an empty answer.
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1, le=len(QUESTIONS))
    question: str
    text: str | None = None

    @property
    def heading(self) -> str:
        return f"{self.number}. {self.question}"


class AnswerSet(BaseModel):
    """Exactly one Answer per fixed question, in question order."""

    model_config = ConfigDict(frozen=True)

    answers: tuple[Answer, ...]

    @field_validator("answers")
    @classmethod
    def _aligned_with_questions(cls, answers: tuple[Answer, ...]) -> tuple[Answer, ...]:
        if len(answers) != len(QUESTIONS):
            raise ValueError(f"expected {len(QUESTIONS)} answers, got {len(answers)}")
        for position, answer in enumerate(answers, start=1):
            if answer.number != position:
                raise ValueError(f"answer {answer.number} found at position {position}")
        return answers

    @classmethod
    def from_texts(cls, texts: list[str | None]) -> "AnswerSet":
        """Build an AnswerSet, padding missing positions with None."""
        padded = list(texts[: len(QUESTIONS)])
        padded += [None] * (len(QUESTIONS) - len(padded))
        return cls(
            answers=tuple(
                Answer(number=number, question=question, text=text)
                for number, (question, text) in enumerate(zip(QUESTIONS, padded), start=1)
            )
        )

    @property
    def texts(self) -> list[str | None]:
        return [answer.text for answer in self.answers]

    @property
    def missing(self) -> list[int]:
        """Numbers of the questions that got no answer."""
        return [answer.number for answer in self.answers if answer.text is None]

    @property
    def is_complete(self) -> bool:
        return not self.missing


class AnalysisResult(BaseModel):
    """Everything one pipeline run produced.

    A result is degraded, but still successful, when the channel could not be
    resolved, the channel had no videos, or the completion did not split into
    seven answers.
    """

    model_config = ConfigDict(frozen=True)

    channel_url: str
    reference: ChannelReference
    channel_id: str | None
    videos: tuple[VideoRecord, ...]
    raw_completion: str
    answers: AnswerSet

    @property
    def is_degraded(self) -> bool:
        return self.channel_id is None or not self.videos or not self.answers.is_complete
