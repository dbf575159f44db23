"""
Pydantic schemas for career advice flows: suggestions, progression map,
professional roadmap and the chatbot
"""
from typing import List, Literal, Optional
from pydantic import Field

from app.schemas.common import OutputModel, RequestModel


# ========== Career suggestions ==========
class CareerSuggestionsRequest(RequestModel):
    academic_stage: Literal["10th", "12th", "UG"] = Field(..., alias="academicStage")
    interests: str = Field(..., min_length=2, max_length=1000, description="Comma separated if multiple")


class CareerSuggestionsOutput(OutputModel):
    career_paths: str = Field(..., alias="careerPaths")
    relevant_fields_of_study: str = Field(..., alias="relevantFieldsOfStudy")


# ========== Career progression map ==========
class CareerProgressionRequest(RequestModel):
    current_role: str = Field(..., alias="currentRole", min_length=2, max_length=200)
    skills: str = Field(..., min_length=2, max_length=2000, description="Comma-separated skills")


class ProgressionStep(OutputModel):
    role: str
    upskilling: List[str]
    cross_industry_shift: Optional[str] = Field(None, alias="crossIndustryShift")


class CareerProgressionOutput(OutputModel):
    career_path: List[ProgressionStep] = Field(..., alias="careerPath")


# ========== Professional roadmap ==========
class WorkExperience(RequestModel):
    role: str = Field(..., min_length=1, max_length=200)
    company: str = Field(..., min_length=1, max_length=200)
    duration: str = Field(..., min_length=1, max_length=100, description='e.g. "2018 - 2022"')
    achievements: str = Field(..., max_length=5000)


class ProfessionalAdviceRequest(RequestModel):
    work_experience: List[WorkExperience] = Field(..., alias="workExperience", min_length=1)
    current_industry: str = Field(..., alias="currentIndustry", min_length=2, max_length=200)
    career_goals: List[str] = Field(..., alias="careerGoals", min_length=1, description="promotion / switch / upskill")
    assessment_score: Optional[float] = Field(None, alias="assessmentScore", ge=0, le=100)


class NextRole(OutputModel):
    role: str
    reason: str


class CertificationAdvice(OutputModel):
    name: str
    reason: str


class CareerSwitch(OutputModel):
    new_role: str = Field(..., alias="newRole")
    new_industry: str = Field(..., alias="newIndustry")
    reason: str


class ProfessionalAdviceOutput(OutputModel):
    next_roles: List[NextRole] = Field(..., alias="nextRoles")
    certifications: List[CertificationAdvice]
    career_switches: List[CareerSwitch] = Field(..., alias="careerSwitches")


# ========== Chatbot ==========
class CareerChatRequest(RequestModel):
    query: str = Field(..., min_length=1, max_length=4000)


class CareerChatOutput(OutputModel):
    response: str
