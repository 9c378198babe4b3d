from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1.0)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(BaseModel):
    """Schema for a partial job update (id and company cannot change)"""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1.0)

    @field_validator("title", mode="before")
    @classmethod
    def title_not_null(cls, v: Any) -> Any:
        # Omit the field to leave it unchanged; null would violate NOT NULL
        if v is None:
            raise ValueError("title cannot be null")
        return v


class JobSummary(BaseModel):
    """Job fields without the owning company"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    salary: Optional[int] = None
    # NUMERIC comes back as Decimal (or float on SQLite); render it as text
    equity: Optional[str] = None

    @field_validator("equity", mode="before")
    @classmethod
    def equity_as_text(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)


class JobResponse(JobSummary):
    """Schema for job response"""
    company_handle: str


class JobCompany(BaseModel):
    """Company nested inside a job detail"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class JobDetailResponse(JobSummary):
    """Job with its company"""
    company: JobCompany


class JobEnvelope(BaseModel):
    job: JobResponse


class JobDetailEnvelope(BaseModel):
    job: JobDetailResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]


class JobDeletedResponse(BaseModel):
    deleted: int
