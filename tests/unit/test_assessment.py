"""Tests for local assessment scoring and the assessment schemas"""

import pytest
from pydantic import ValidationError

from app.schemas.assessment import AssessmentQuestion, AssessmentQuestionsRequest
from app.services.assessment_service import score_assessment


def question(answer, options=("A", "B", "C", "D")):
    return AssessmentQuestion(question="Pick one", options=list(options), correctAnswer=answer)


class TestScoreAssessment:

    def test_all_correct(self):
        questions = [question("A"), question("B")]
        assert score_assessment(questions, ["A", "B"]) == {"correct": 2, "total": 2, "percentage": 100.0}

    def test_partial(self):
        questions = [question("A"), question("B"), question("C"), question("D")]
        result = score_assessment(questions, ["A", "C", "C", "A"])
        assert result["correct"] == 2
        assert result["percentage"] == 50.0

    def test_missing_answers_count_as_wrong(self):
        questions = [question("A"), question("B"), question("C")]
        result = score_assessment(questions, ["A"])
        assert result["correct"] == 1
        assert result["total"] == 3

    def test_extra_answers_are_ignored(self):
        assert score_assessment([question("A")], ["A", "B", "C"])["correct"] == 1

    def test_exact_match_only(self):
        assert score_assessment([question("Paris", ("Paris", "Rome"))], ["paris"])["correct"] == 0

    def test_empty_questions(self):
        with pytest.raises(ValueError):
            score_assessment([], [])


class TestAssessmentSchemas:

    def test_default_question_count(self):
        assert AssessmentQuestionsRequest(level="UG", topic="Data Structures").number_of_questions == 20

    @pytest.mark.parametrize("count", [9, 31])
    def test_question_count_bounds(self, count):
        with pytest.raises(ValidationError):
            AssessmentQuestionsRequest(level="UG", topic="Data Structures", numberOfQuestions=count)

    def test_unknown_level(self):
        with pytest.raises(ValidationError):
            AssessmentQuestionsRequest(level="PhD", topic="Data Structures")

    def test_blank_question_rejected(self):
        with pytest.raises(ValidationError):
            AssessmentQuestion(question="   ", options=["A"], correctAnswer="A")
