"""
Career Advisor Service - career suggestions, progression maps, professional
roadmaps and the career chatbot
"""
from typing import Any, Dict

from app.schemas.career import (
    CareerChatOutput,
    CareerChatRequest,
    CareerProgressionOutput,
    CareerProgressionRequest,
    CareerSuggestionsOutput,
    CareerSuggestionsRequest,
    ProfessionalAdviceOutput,
    ProfessionalAdviceRequest,
)
from app.services.dispatcher import ModelSelector
from app.services.flows import Convention, FlowDefinition, FlowPolicy, fmt_number, run_flow
from app.services.model_client import ModelClient


def build_suggestions_prompt(request: CareerSuggestionsRequest) -> str:
    return f"""You are an AI career advisor. Based on the student's academic stage and interests, suggest potential career paths and relevant fields of study.

Academic Stage: {request.academic_stage}
Interests: {request.interests}

Respond with a JSON object with two string fields, "careerPaths" and "relevantFieldsOfStudy". Be concise and specific."""


def build_progression_prompt(request: CareerProgressionRequest) -> str:
    return f"""You are an AI career advisor. Given the current role and skills of a professional, provide a career progression map with suggested upskilling and potential cross-industry shifts.

Current Role: {request.current_role}
Skills: {request.skills}

Return a JSON object with a "careerPath" array. Each entry has:
- "role": the next potential role,
- "upskilling": an array of specific skills to acquire for that role,
- "crossIndustryShift": (optional) a relevant cross-industry shift opportunity."""


def build_professional_prompt(request: ProfessionalAdviceRequest) -> str:
    experience = "\n".join(
        f"- Role: {job.role} at {job.company} ({job.duration})\n  Achievements: {job.achievements}"
        for job in request.work_experience
    )
    assessment = ""
    if request.assessment_score is not None:
        assessment = (
            f"- Professional Skills Assessment Score: {fmt_number(request.assessment_score)}%\n"
            "This test evaluated their general aptitude and knowledge of industry trends. "
            "A higher score indicates strong potential."
        )

    return f"""You are an expert career advisor and strategist for professionals across ALL industries in India (e.g., IT, Healthcare, Law, Arts, Engineering, Education, Finance, etc.).
Your task is to provide a personalized and actionable career roadmap based on the user's detailed profile.

USER'S PROFILE:
- Current Industry: {request.current_industry}

- Work Experience:
{experience}

- Stated Career Goals: {", ".join(request.career_goals)}

{assessment}

INSTRUCTIONS:
Analyze the user's entire profile and generate a tailored roadmap. Recommendations must be specific, actionable, and directly relevant to the user's industry and goals.

1. "nextRoles": If the user wants a promotion, suggest 2-3 logical next-level roles, each as {{"role": ..., "reason": ...}}.
   - Example for a Civil Engineer: "Senior Project Engineer" or "Structural Design Manager".
   - Example for a Teacher: "Head of Department" or "Academic Coordinator".
2. "certifications": If the user wants to upskill, suggest 2-3 specific certifications or courses, each as {{"name": ..., "reason": ...}}.
   - Example for an Accountant: "Certified Public Accountant (CPA) or Financial Modeling & Valuation Analyst (FMVA) to move into financial analysis."
3. "careerSwitches": If the user wants a career change, suggest 1-2 realistic switches, each as {{"newRole": ..., "newIndustry": ..., "reason": ...}} highlighting transferable skills.
   - Example for a Journalist: "Content Strategist in the Marketing industry, leveraging your storytelling and research skills."

Be extremely practical and avoid generic advice. If a section isn't relevant to the user's goals, return an empty array for it."""


def build_chat_prompt(request: CareerChatRequest) -> str:
    return f"""You are a helpful AI career counselor chatbot. A user is asking for career advice.

Respond to the following query:
{request.query}

Provide clear, concise, and actionable advice.
If the query is not career-related, politely decline to answer.
If the query is about how to use the platform, provide guidance.

Return a JSON object with a single string field "response"."""


CAREER_SUGGESTIONS = FlowDefinition(
    name="career_suggestions",
    output_model=CareerSuggestionsOutput,
    build_prompt=build_suggestions_prompt,
    policy=FlowPolicy(convention=Convention.RESULT),
)

CAREER_PROGRESSION = FlowDefinition(
    name="career_progression",
    output_model=CareerProgressionOutput,
    build_prompt=build_progression_prompt,
    policy=FlowPolicy(convention=Convention.RESULT),
)

PROFESSIONAL_ADVICE = FlowDefinition(
    name="professional_advice",
    output_model=ProfessionalAdviceOutput,
    build_prompt=build_professional_prompt,
    policy=FlowPolicy(convention=Convention.THROW),
)

CAREER_CHAT = FlowDefinition(
    name="career_chat",
    output_model=CareerChatOutput,
    build_prompt=build_chat_prompt,
    policy=FlowPolicy(convention=Convention.RESULT),
)


async def suggest_careers(
    request: CareerSuggestionsRequest, client: ModelClient, selector: ModelSelector
) -> Dict[str, Any]:
    return await run_flow(CAREER_SUGGESTIONS, request, client, selector)


async def map_career_progression(
    request: CareerProgressionRequest, client: ModelClient, selector: ModelSelector
) -> Dict[str, Any]:
    return await run_flow(CAREER_PROGRESSION, request, client, selector)


async def get_professional_advice(
    request: ProfessionalAdviceRequest, client: ModelClient, selector: ModelSelector
) -> Dict[str, Any]:
    """Roadmap for a working professional. Raises TerminalModelError on failure."""
    return await run_flow(PROFESSIONAL_ADVICE, request, client, selector)


async def chat(request: CareerChatRequest, client: ModelClient, selector: ModelSelector) -> Dict[str, Any]:
    return await run_flow(CAREER_CHAT, request, client, selector)
