"""
Pydantic schemas for generated multiple-choice assessments and their scoring
"""
from typing import List, Literal
from pydantic import Field, field_validator, model_validator

from app.schemas.common import OutputModel, RequestModel


class AssessmentQuestionsRequest(RequestModel):
    level: Literal["10th", "12th", "UG", "Pro"]
    topic: str = Field(..., min_length=2, max_length=300)
    number_of_questions: int = Field(20, alias="numberOfQuestions", ge=10, le=30)


class AssessmentQuestion(OutputModel):
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=1)
    correct_answer: str = Field(..., alias="correctAnswer")

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question must not be blank")
        return v

    @model_validator(mode="after")
    def answer_is_an_option(self):
        if self.correct_answer not in self.options:
            raise ValueError("correctAnswer must be one of options")
        return self


class AssessmentQuestionsOutput(OutputModel):
    questions: List[AssessmentQuestion]


class ScoreAssessmentRequest(RequestModel):
    questions: List[AssessmentQuestion] = Field(..., min_length=1)
    answers: List[str] = Field(default_factory=list, description="User answers, in question order")


class AssessmentScore(OutputModel):
    correct: int
    total: int
    percentage: float
