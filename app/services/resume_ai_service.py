"""Resume AI Service - resume enhancement for the builder and ATS review of uploaded resumes"""

from typing import Any, Dict

from app.schemas.resume import ResumeDetailsOutput, ResumeDetailsRequest, ReviewResumeOutput, ReviewResumeRequest
from app.services.dispatcher import ModelSelector
from app.services.flows import Convention, FlowDefinition, FlowPolicy, run_flow
from app.services.model_client import ModelClient


def _or_blank(value) -> str:
    return value if value else ""


def build_enhance_prompt(request: ResumeDetailsRequest) -> str:
    education = "\n".join(
        f"- Degree: {e.degree}, Institution: {e.institution}, Year: {e.year}, Score: {_or_blank(e.score)}"
        for e in request.education
    ) or "- none provided"
    experience = "\n".join(
        f"- Role: {w.role}, Company: {w.company}, Duration: {w.duration}, Achievements: {w.achievements}"
        for w in (request.work_experience or [])
    ) or "- none provided"
    projects = "\n".join(
        f"- Name: {p.name}, Description: {p.description}, Tech Stack: {_or_blank(p.tech_stack)}, URL: {_or_blank(p.url)}"
        for p in (request.projects or [])
    ) or "- none provided"

    return f"""You are an expert resume writer and ATS optimization specialist. Take the provided raw resume data and transform it into a professional, polished, and complete resume, ready for job applications.

USER'S RESUME DATA:
- Full Name: {request.full_name}
- Email: {request.email}
- Phone: {request.phone}
- LinkedIn: {_or_blank(request.linkedin)}
- GitHub: {_or_blank(request.github)}
- Professional Title: {request.professional_title}
- Career Objective: {request.career_objective}

- Education:
{education}

- Work Experience:
{experience}

- Projects:
{projects}

- Skills:
  - Technical: {_or_blank(request.technical_skills)}
  - Soft: {_or_blank(request.soft_skills)}

- Achievements/Extracurricular:
{_or_blank(request.extracurricular)}

INSTRUCTIONS (follow strictly):
1. Content validation & enhancement:
   - Correct obvious errors (e.g., "B.Tch" instead of "B.Tech").
   - Expand a short career objective into a compelling 2-3 sentence summary.
   - Elaborate brief project descriptions: purpose, the user's role, and the outcome.
   - Every project MUST have a relevant, comma-separated tech stack; refine the user's or generate a realistic one.
   - Replace placeholder-looking values (e.g., "My University") with professional, relevant examples.
2. ATS optimization: include relevant keywords for the professional title, rewrite achievements and project descriptions as bullet points starting with strong action verbs, and quantify outcomes where possible.
3. Keep the tone concise, professional, and action-oriented.
4. Skills: fix spelling and formatting of the listed skills. Do NOT add any new skills.
5. Output: return a JSON object with exactly the same structure and keys as the input (fullName, email, phone, linkedin, github, professionalTitle, careerObjective, education[degree, institution, year, score], technicalSkills, softSkills, projects[name, description, techStack, url], workExperience[role, company, duration, achievements], extracurricular). Do not remove any fields, even if they were empty in the input."""


def build_review_prompt(request: ReviewResumeRequest) -> str:
    return f"""You are an expert resume reviewer and career coach with deep knowledge of Applicant Tracking Systems (ATS). Analyze the provided resume text and give it a comprehensive review.

RESUME TEXT:
{request.resume_text}

INSTRUCTIONS:
1. "atsScore": a number from 0 to 10 for ATS compatibility (standard formatting, keyword optimization for common roles, clear headings like "Work Experience", "Education", "Skills", and contact information). 10 is perfectly optimized.
2. "summary": a brief, balanced summary of the resume's strongest points and its biggest areas for improvement.
3. "improvements": an array of at least 5-7 specific, actionable improvements. The advice must be concrete.
   - Bad advice: "Improve your bullet points."
   - Good advice: "Rewrite bullet points to start with strong action verbs (e.g., 'Managed', 'Developed', 'Accelerated') and quantify achievements (e.g., 'Increased sales by 15%')."
   - Good advice: "Ensure your contact information is complete and includes your LinkedIn profile URL."

Return the analysis as a JSON object."""


RESUME_ENHANCEMENT = FlowDefinition(
    name="resume_enhancement",
    output_model=ResumeDetailsOutput,
    build_prompt=build_enhance_prompt,
    policy=FlowPolicy(convention=Convention.THROW),
)

RESUME_REVIEW = FlowDefinition(
    name="resume_review",
    output_model=ReviewResumeOutput,
    build_prompt=build_review_prompt,
    policy=FlowPolicy(convention=Convention.RESULT),
)


async def enhance_resume(
    request: ResumeDetailsRequest, client: ModelClient, selector: ModelSelector
) -> Dict[str, Any]:
    """Polished resume in the same shape as the input. Raises TerminalModelError on failure."""
    return await run_flow(RESUME_ENHANCEMENT, request, client, selector)


async def review_resume(
    request: ReviewResumeRequest, client: ModelClient, selector: ModelSelector
) -> Dict[str, Any]:
    return await run_flow(RESUME_REVIEW, request, client, selector)
