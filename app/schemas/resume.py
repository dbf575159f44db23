"""
Pydantic schemas for resume enhancement and resume review
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import OutputModel, RequestModel


class EducationEntry(RequestModel):
    degree: str
    institution: str
    year: str
    score: Optional[str] = None


class WorkExperienceEntry(RequestModel):
    role: str
    company: str
    duration: str
    achievements: str


class ProjectEntry(RequestModel):
    name: str
    description: str
    tech_stack: Optional[str] = Field(None, alias="techStack")
    url: Optional[str] = None


class ResumeDetails(BaseModel):
    """Resume fields as entered in the builder; the enhancer returns the same shape."""
    full_name: str = Field(..., alias="fullName")
    email: str
    phone: str
    linkedin: Optional[str] = None
    github: Optional[str] = None
    professional_title: str = Field(..., alias="professionalTitle")
    career_objective: str = Field(..., alias="careerObjective")
    education: List[EducationEntry]
    technical_skills: Optional[str] = Field(None, alias="technicalSkills")
    soft_skills: Optional[str] = Field(None, alias="softSkills")
    projects: Optional[List[ProjectEntry]] = None
    work_experience: Optional[List[WorkExperienceEntry]] = Field(None, alias="workExperience")
    extracurricular: Optional[str] = None


class ResumeDetailsRequest(ResumeDetails):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ResumeDetailsOutput(ResumeDetails):
    model_config = ConfigDict(strict=True, populate_by_name=True)


class ReviewResumeRequest(RequestModel):
    resume_text: str = Field(..., alias="resumeText", min_length=50, max_length=50000)


class ReviewResumeOutput(OutputModel):
    ats_score: float = Field(..., alias="atsScore", ge=0, le=10)
    improvements: List[str]
    summary: str
