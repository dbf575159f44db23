"""
Academic Advisor Service - stream, degree course and undergraduate recommendations
for students in India
"""
from typing import Any, Dict

from app.schemas.academic import (
    RecommendDegreeCoursesOutput,
    RecommendDegreeCoursesRequest,
    RecommendStreamOutput,
    RecommendStreamRequest,
    UndergraduateOptionsOutput,
    UndergraduateOptionsRequest,
)
from app.services.dispatcher import ModelSelector
from app.services.flows import (
    Convention,
    FlowDefinition,
    FlowPolicy,
    Tier,
    fmt_number,
    optional_line,
    run_flow,
)
from app.services.model_client import ModelClient


# ========== Prompts ==========

def build_stream_prompt(request: RecommendStreamRequest) -> str:
    marks = request.marks
    optional_subject = ""
    if marks.optional_subject:
        optional_marks = fmt_number(marks.optional_marks) if marks.optional_marks is not None else "not given"
        optional_subject = f"- {marks.optional_subject}: {optional_marks}"

    test_section = ""
    if request.test_score is not None:
        test_section = (
            f"Assessment Test Score: {fmt_number(request.test_score)}%\n"
            "This test evaluated general aptitude in Math, Science, English, and Social Studies."
        )

    return f"""You are an expert career counselor for 10th-grade students in India. Your task is to recommend a suitable academic stream (Science, Commerce, or Arts) based on the student's marks and, if available, their assessment test score.

Student's Marks (out of 100):
- Math: {fmt_number(marks.math)}
- Science: {fmt_number(marks.science)}
- English: {fmt_number(marks.english)}
- Social Studies: {fmt_number(marks.social_studies)}
{optional_subject}

{test_section}

Analyze the provided data and recommend the most suitable stream.

General Guidelines:
- Science Stream: Recommend if the student has high scores in Math and Science (typically > 80). Strong performance in these subjects is crucial for engineering, medicine, and pure sciences.
- Commerce Stream: Recommend if the student shows good aptitude in Math and Social Studies. This stream leads to careers in finance, accounting, business, and management.
- Arts/Humanities Stream: Recommend if the student excels in English, Social Studies, and shows creative or analytical thinking. This stream opens up diverse careers in law, journalism, public service, design, and academia.

Return a JSON object with:
1. "recommendedStream": the single best stream, exactly one of "Science", "Commerce" or "Arts".
2. "reasoning": a clear, concise explanation referencing the student's marks and test score (if provided).
3. "careerPaths": an array of 3-5 promising career paths for the recommended stream."""


_TWELFTH_SUBJECTS = (
    ("physics", "Physics"),
    ("chemistry", "Chemistry"),
    ("math", "Math"),
    ("biology", "Biology"),
    ("accounts", "Accounts"),
    ("business_studies", "Business Studies"),
    ("economics", "Economics"),
    ("history", "History"),
    ("political_science", "Political Science"),
    ("sociology_psychology", "Sociology/Psychology"),
    ("english", "English"),
)


def build_degree_courses_prompt(request: RecommendDegreeCoursesRequest) -> str:
    marks = "\n".join(
        line for line in (
            optional_line(label, getattr(request.twelfth_marks, field))
            for field, label in _TWELFTH_SUBJECTS
        ) if line
    )
    aptitude = ""
    if request.aptitude_test_score is not None:
        aptitude = (
            f"- Aptitude Test Score: {fmt_number(request.aptitude_test_score)}%\n"
            "This test evaluated their aptitude in their chosen stream."
        )

    return f"""You are an expert career counselor for 12th-grade students in India. Your task is to recommend suitable degree courses based on the student's academic performance.

Student's Academic Data:
- 10th Grade Percentage: {fmt_number(request.tenth_percentage)}%
- 12th Grade Stream: {request.twelfth_stream}
- 12th Grade Marks (out of 100):
{marks}
{aptitude}

Analyze the provided data and recommend 3-5 suitable degree courses.

General Guidelines for Recommendations:
- Science Stream:
  - If performance is strong in Math, Physics, and Chemistry, suggest Engineering courses (B.E./B.Tech) in relevant fields.
  - If performance is strong in Biology, Physics, and Chemistry, suggest Medical courses (MBBS, BDS), Pharmacy (B.Pharm), or Biotechnology.
  - If performance is balanced, suggest pure sciences (B.Sc.).
- Commerce Stream: If performance is strong in Accounts, Business Studies, and Economics, suggest courses like B.Com, BBA, BMS, or preparation for professional exams like CA Foundation.
- Arts/Humanities Stream: If performance is strong in History, Political Science, English, etc., suggest courses like B.A. in various specializations, B.Ed (for teaching), Journalism (BJMC), or Design.

Return a JSON object with:
1. "recommendedCourses": an array of 3-5 suitable degree courses.
2. "reasoning": a clear, concise explanation referencing the student's academic performance."""


def build_undergraduate_prompt(request: UndergraduateOptionsRequest) -> str:
    academics = request.academics
    assessment = ""
    if request.assessment_score is not None:
        assessment = (
            f"- Career Assessment Test Score: {fmt_number(request.assessment_score)}%\n"
            "This test evaluated their core-subject knowledge and general aptitude. "
            "A higher score indicates strong potential in their field."
        )

    return f"""You are an expert career counselor for undergraduate students from all domains in India (including Engineering, Medicine, Arts, Commerce, Law, Design, etc.).
Your task is to recommend suitable job roles and higher study/certification options based on the student's complete academic profile, skills, and assessment test score (if available).

Student's Profile:
- 10th Grade Percentage: {fmt_number(academics.tenth_percentage)}%
- 12th Grade Percentage: {fmt_number(academics.twelfth_percentage)}% (Stream: {academics.twelfth_stream})
- Degree: {academics.degree_name} in {academics.specialization}
- Current Degree Score: {fmt_number(academics.current_grade)} (CGPA or %)

Skills:
- Technical: {request.skills.technical or "not provided"}
- Soft: {request.skills.soft or "not provided"}

{assessment}

Analyze the complete profile and return a JSON object with two sets of recommendations:
1. "jobRoles": 3-5 specific, domain-relevant job roles, each as {{"role": ..., "reason": ...}} explaining why it fits their degree, specialization, skills, and academic performance.
2. "higherStudies": 3-5 options for further education or professional certification, each as {{"course": ..., "reason": ...}}. Consider master's degrees (e.g., M.Tech, MBA, MS), professional exams (e.g., UPSC, PG Medical Entrance), or certifications that would add value to their profile.

Your recommendations must be diverse and not limited to the IT field."""


# ========== Flows ==========

RECOMMEND_STREAM = FlowDefinition(
    name="recommend_stream",
    output_model=RecommendStreamOutput,
    build_prompt=build_stream_prompt,
    policy=FlowPolicy(convention=Convention.RESULT),
)

# Single attempt on the fast tier, no fallback.
RECOMMEND_DEGREE_COURSES = FlowDefinition(
    name="recommend_degree_courses",
    output_model=RecommendDegreeCoursesOutput,
    build_prompt=build_degree_courses_prompt,
    policy=FlowPolicy(convention=Convention.THROW, single_attempt=True, single_attempt_tier=Tier.FALLBACK),
)

RECOMMEND_UNDERGRADUATE_OPTIONS = FlowDefinition(
    name="recommend_undergraduate_options",
    output_model=UndergraduateOptionsOutput,
    build_prompt=build_undergraduate_prompt,
    policy=FlowPolicy(convention=Convention.RESULT),
)


async def recommend_stream(
    request: RecommendStreamRequest, client: ModelClient, selector: ModelSelector
) -> Dict[str, Any]:
    """Science / Commerce / Arts for a 10th-grade student. Returns an error record on failure."""
    return await run_flow(RECOMMEND_STREAM, request, client, selector)


async def recommend_degree_courses(
    request: RecommendDegreeCoursesRequest, client: ModelClient, selector: ModelSelector
) -> Dict[str, Any]:
    """Degree courses for a 12th-grade student. Raises ModelInvocationError on failure."""
    return await run_flow(RECOMMEND_DEGREE_COURSES, request, client, selector)


async def recommend_undergraduate_options(
    request: UndergraduateOptionsRequest, client: ModelClient, selector: ModelSelector
) -> Dict[str, Any]:
    return await run_flow(RECOMMEND_UNDERGRADUATE_OPTIONS, request, client, selector)
