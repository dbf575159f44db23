"""
Assessment Service - generates multiple-choice aptitude tests and scores the answers.

The percentage from `score_assessment` is what the recommendation flows take
as testScore / aptitudeTestScore / assessmentScore.
"""
from typing import Any, Dict, List, Sequence

from app.schemas.assessment import AssessmentQuestion, AssessmentQuestionsOutput, AssessmentQuestionsRequest
from app.services.dispatcher import ModelSelector
from app.services.flows import Convention, FlowDefinition, FlowPolicy, run_flow
from app.services.model_client import ModelClient


def build_assessment_prompt(request: AssessmentQuestionsRequest) -> str:
    return f"""You are an expert in creating multiple-choice questions for various levels of students and professionals.

Based on the user's level and the topic, generate {request.number_of_questions} multiple-choice questions.
Each question should have 4 options, with one correct answer.

Level: {request.level}
Topic: {request.topic}

Format the output as a JSON object with a "questions" array. Each object in the array must have the keys "question", "options" and "correctAnswer". "options" is an array of strings and "correctAnswer" must be exactly one of the options.
Ensure that the questions are relevant and appropriate for the specified level."""


ASSESSMENT_QUESTIONS = FlowDefinition(
    name="assessment_questions",
    output_model=AssessmentQuestionsOutput,
    build_prompt=build_assessment_prompt,
    policy=FlowPolicy(convention=Convention.RESULT),
)


async def generate_assessment_questions(
    request: AssessmentQuestionsRequest, client: ModelClient, selector: ModelSelector
) -> Dict[str, Any]:
    return await run_flow(ASSESSMENT_QUESTIONS, request, client, selector)


def score_assessment(questions: Sequence[AssessmentQuestion], answers: List[str]) -> Dict[str, Any]:
    """
    Count exact matches against each question's correct answer.

    Answers are positional; a missing answer counts as wrong.
    Raises ValueError for an empty question list.
    """
    if not questions:
        raise ValueError("cannot score an assessment with no questions")

    correct = sum(
        1 for i, question in enumerate(questions)
        if i < len(answers) and answers[i] == question.correct_answer
    )
    total = len(questions)
    return {
        "correct": correct,
        "total": total,
        "percentage": correct / total * 100,
    }
