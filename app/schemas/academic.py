"""
Pydantic schemas for school and undergraduate guidance flows
"""
from typing import List, Literal, Optional
from pydantic import Field

from app.schemas.common import OutputModel, RequestModel

Stream = Literal["Science", "Commerce", "Arts"]


# ========== 10th grade: stream recommendation ==========
class TenthMarks(RequestModel):
    """Marks out of 100"""
    math: float = Field(..., ge=0, le=100)
    science: float = Field(..., ge=0, le=100)
    english: float = Field(..., ge=0, le=100)
    social_studies: float = Field(..., ge=0, le=100)
    optional_subject: Optional[str] = Field(None, max_length=100)
    optional_marks: Optional[float] = Field(None, ge=0, le=100)


class RecommendStreamRequest(RequestModel):
    marks: TenthMarks
    test_score: Optional[float] = Field(None, alias="testScore", ge=0, le=100, description="Assessment test percentage")


class RecommendStreamOutput(OutputModel):
    recommended_stream: Stream = Field(..., alias="recommendedStream")
    reasoning: str
    career_paths: List[str] = Field(..., alias="careerPaths")


# ========== 12th grade: degree courses ==========
class TwelfthMarks(RequestModel):
    """Marks out of 100 for the subjects of the chosen stream"""
    physics: Optional[float] = Field(None, ge=0, le=100)
    chemistry: Optional[float] = Field(None, ge=0, le=100)
    math: Optional[float] = Field(None, ge=0, le=100)
    biology: Optional[float] = Field(None, ge=0, le=100)
    accounts: Optional[float] = Field(None, ge=0, le=100)
    business_studies: Optional[float] = Field(None, ge=0, le=100)
    economics: Optional[float] = Field(None, ge=0, le=100)
    history: Optional[float] = Field(None, ge=0, le=100)
    political_science: Optional[float] = Field(None, ge=0, le=100)
    sociology_psychology: Optional[float] = Field(None, ge=0, le=100)
    english: float = Field(..., ge=0, le=100)


class RecommendDegreeCoursesRequest(RequestModel):
    tenth_percentage: float = Field(..., alias="tenthPercentage", ge=0, le=100)
    twelfth_stream: Stream = Field(..., alias="twelfthStream")
    twelfth_marks: TwelfthMarks = Field(..., alias="twelfthMarks")
    aptitude_test_score: Optional[float] = Field(None, alias="aptitudeTestScore", ge=0, le=100)


class RecommendDegreeCoursesOutput(OutputModel):
    recommended_courses: List[str] = Field(..., alias="recommendedCourses")
    reasoning: str


# ========== Undergraduate: job roles and higher studies ==========
class UndergraduateAcademics(RequestModel):
    tenth_percentage: float = Field(..., alias="tenthPercentage", ge=0, le=100)
    twelfth_percentage: float = Field(..., alias="twelfthPercentage", ge=0, le=100)
    twelfth_stream: Stream = Field(..., alias="twelfthStream")
    degree_name: str = Field(..., alias="degreeName", min_length=1, max_length=200)
    specialization: str = Field(..., min_length=1, max_length=200)
    current_grade: float = Field(..., alias="currentGrade", ge=0, le=100, description="CGPA or percentage")


class UndergraduateSkills(RequestModel):
    technical: str = Field("", description="Comma-separated technical skills")
    soft: str = Field("", description="Comma-separated soft skills")


class UndergraduateOptionsRequest(RequestModel):
    academics: UndergraduateAcademics
    skills: UndergraduateSkills
    assessment_score: Optional[float] = Field(None, alias="assessmentScore", ge=0, le=100)


class JobRole(OutputModel):
    role: str
    reason: str


class HigherStudyOption(OutputModel):
    course: str
    reason: str


class UndergraduateOptionsOutput(OutputModel):
    job_roles: List[JobRole] = Field(..., alias="jobRoles")
    higher_studies: List[HigherStudyOption] = Field(..., alias="higherStudies")
