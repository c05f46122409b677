"""Structured sections extracted from raw resume text."""

from pydantic import BaseModel, ConfigDict


class ContactInfo(BaseModel):
    """Contact details found in the resume header. Every field is optional."""
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None
    website: str | None = None
    location: str | None = None


class ExperienceItem(BaseModel):
    """A single work experience entry."""
    model_config = ConfigDict(frozen=True)

    title: str = ""
    company: str = ""
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    current: bool = False
    description: list[str] = []

    @property
    def effective_end_date(self) -> str | None:
        """End date as it should be displayed; a current role always ends at 'Present'."""
        if self.current:
            return "Present"
        return self.end_date


class EducationItem(BaseModel):
    """A single education entry."""
    model_config = ConfigDict(frozen=True)

    degree: str = ""
    institution: str = ""
    location: str | None = None
    graduation_date: str | None = None
    gpa: str | None = None
    details: list[str] = []


class ProjectItem(BaseModel):
    """A single project entry."""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""
    technologies: list[str] = []
    link: str | None = None


class ParsedSections(BaseModel):
    """Output of the section extractor.

    Produced once per uploaded resume and replaced wholesale on re-parse.
    """
    model_config = ConfigDict(frozen=True)

    contact: ContactInfo | None = None
    summary: str | None = None
    experience: list[ExperienceItem] = []
    education: list[EducationItem] = []
    skills: list[str] = []
    projects: list[ProjectItem] = []
    certifications: list[str] = []

    @property
    def is_empty(self) -> bool:
        has_contact = self.contact is not None and any(
            value for value in self.contact.model_dump().values()
        )
        return not (
            has_contact
            or self.summary
            or self.experience
            or self.education
            or self.skills
            or self.projects
            or self.certifications
        )
