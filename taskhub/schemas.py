from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, PositiveInt
from pydantic.alias_generators import to_camel

from .models import ProjectStatus, RequestStatus, RequestType, TaskStatus


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire; either form is accepted on input."""

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


# ACCOUNTS
class AccountCreate(CamelModel):
    first_name: str = Field(min_length=3)
    last_name: str = Field(min_length=3)
    email: EmailStr
    password: str = Field(min_length=6)


class AccountUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=3)
    last_name: Optional[str] = Field(default=None, min_length=3)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)


class AccountSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str


class AdminOut(AccountSummary):
    created_at: datetime


class UserOut(AccountSummary):
    created_by: Optional[int] = None
    created_at: datetime


# AUTH
class UserLoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class LoginRequest(UserLoginRequest):
    role: Literal["admin", "user"]


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class SignupResponse(TokenResponse):
    admin: AccountSummary


class LoggedInAccount(AccountSummary):
    role: str


class LoginResponse(TokenResponse):
    user: LoggedInAccount


class MessageResponse(BaseModel):
    message: str


class CurrentUser(BaseModel):
    """Claims carried by a verified bearer token."""

    user_id: int
    email: str
    role: str


# DESIGNATIONS
class DesignationCreate(CamelModel):
    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, min_length=10, max_length=500)


class DesignationUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, min_length=10, max_length=500)


class DesignationRef(CamelModel):
    id: int
    name: str


class DesignationOut(DesignationRef):
    description: Optional[str] = None
    created_at: datetime


# PROJECTS
class ProjectCreate(CamelModel):
    name: str = Field(min_length=3)
    description: Optional[str] = Field(default=None, min_length=10)
    status: Optional[ProjectStatus] = None


class ProjectUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=3)
    description: Optional[str] = Field(default=None, min_length=10)
    status: Optional[ProjectStatus] = None


class ProjectOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    status: ProjectStatus
    created_by: int
    created_at: datetime


class MemberOut(CamelModel):
    id: int
    project_id: int
    user_id: int
    designation_id: Optional[int] = None
    assigned_at: datetime
    user: AccountSummary


class MemberDetailOut(MemberOut):
    designation: Optional[DesignationRef] = None


class ProjectWithMembers(ProjectOut):
    admin: AccountSummary
    users: List[MemberOut] = []


class ProjectDetail(ProjectOut):
    admin: AccountSummary
    users: List[MemberDetailOut] = []


class AssignUserRequest(CamelModel):
    user_id: PositiveInt


class AssignDesignationRequest(CamelModel):
    designation_id: PositiveInt


class SetUserDesignationRequest(CamelModel):
    designation_id: PositiveInt


class AssignedUsersResponse(CamelModel):
    assigned_users: List[str]


class AssignedDesignationsResponse(CamelModel):
    assigned_designations: List[str]


class ProjectDesignationOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    assigned_at: datetime


class UserDesignationOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    designation: Optional[str] = None


# TASKS
class TaskBase(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    type: Optional[str] = None
    form_schema: Optional[List[Any]] = None


class TaskCreate(TaskBase):
    project_id: int
    assigned_to: Optional[int] = None


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    type: Optional[str] = None
    form_schema: Optional[List[Any]] = None
    project_id: Optional[int] = None
    assigned_to: Optional[int] = None
    status: Optional[TaskStatus] = None
    submission_data: Optional[Dict[str, Any]] = None

    class Config:
        # Unknown keys are kept; update_task rejects them.
        extra = "allow"


class TaskOut(TaskBase):
    id: int
    status: TaskStatus
    submission_data: Optional[Dict[str, Any]] = None
    project_id: int
    assigned_to: Optional[int] = None


class TaskDetail(TaskOut):
    project: ProjectOut
    assignee: Optional[AccountSummary] = None


# REQUESTS
class RequestCreate(CamelModel):
    request_type: RequestType
    requested_value: str = Field(min_length=1)
    current_password: Optional[str] = Field(default=None, min_length=6)


class RequestOut(CamelModel):
    id: int
    user_id: int
    admin_id: int
    request_type: RequestType
    current_value: Optional[str] = None
    requested_value: str
    status: RequestStatus
    created_at: datetime


class RequestWithAdmin(RequestOut):
    admin: AccountSummary


class RequestWithUser(RequestOut):
    user: AccountSummary


class RequestDetail(RequestOut):
    user: AccountSummary
    admin: AccountSummary
