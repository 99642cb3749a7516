import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, ForeignKey, Text, DateTime, JSON, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from .database import Base


def _utcnow():
    return datetime.now(timezone.utc)


def _enum_column(enum_cls):
    return Enum(enum_cls, values_callable=lambda x: [e.value for e in x], native_enum=False, length=32)


class ProjectStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    COMPLETED = "completed"


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class RequestType(str, enum.Enum):
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    EMAIL = "email"
    PASSWORD = "password"


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # Deleting an admin leaves its users orphaned (created_by NULL) rather than deleting them.
    users = relationship("User", back_populates="admin")
    projects = relationship("Project", back_populates="admin", cascade="all, delete-orphan")
    requests = relationship("UserRequest", back_populates="admin", cascade="all, delete-orphan")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    created_by = Column(Integer, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    admin = relationship("Admin", back_populates="users")
    memberships = relationship("ProjectUser", back_populates="user", cascade="all, delete-orphan")
    tasks = relationship("Task", back_populates="assignee")
    requests = relationship("UserRequest", back_populates="user", cascade="all, delete-orphan")


class Designation(Base):
    __tablename__ = "designations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    project_links = relationship("ProjectDesignation", back_populates="designation", cascade="all, delete-orphan")
    members = relationship("ProjectUser", back_populates="designation")


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    description = Column(Text)
    status = Column(_enum_column(ProjectStatus), default=ProjectStatus.ACTIVE, nullable=False)
    created_by = Column(Integer, ForeignKey("admins.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    admin = relationship("Admin", back_populates="projects")
    users = relationship(
        "ProjectUser", back_populates="project", cascade="all, delete-orphan", order_by="ProjectUser.id"
    )
    designations = relationship(
        "ProjectDesignation", back_populates="project", cascade="all, delete-orphan", order_by="ProjectDesignation.id"
    )
    tasks = relationship("Task", back_populates="project", cascade="all, delete-orphan")


class ProjectUser(Base):
    __tablename__ = "project_users"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_project_user"),)

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    designation_id = Column(Integer, ForeignKey("designations.id", ondelete="SET NULL"), nullable=True)
    assigned_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    project = relationship("Project", back_populates="users")
    user = relationship("User", back_populates="memberships")
    designation = relationship("Designation", back_populates="members")


class ProjectDesignation(Base):
    __tablename__ = "project_designations"
    __table_args__ = (UniqueConstraint("project_id", "designation_id", name="uq_project_designation"),)

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    designation_id = Column(Integer, ForeignKey("designations.id", ondelete="CASCADE"), nullable=False)
    assigned_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    project = relationship("Project", back_populates="designations")
    designation = relationship("Designation", back_populates="project_links")


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    type = Column(String, nullable=True)
    form_schema = Column(JSON, nullable=True)
    status = Column(_enum_column(TaskStatus), default=TaskStatus.PENDING, nullable=False)
    submission_data = Column(JSON, nullable=True)

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    project = relationship("Project", back_populates="tasks")
    assignee = relationship("User", back_populates="tasks")


class UserRequest(Base):
    __tablename__ = "user_requests"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # Copied from the user's creator when the request is filed; never re-derived.
    admin_id = Column(Integer, ForeignKey("admins.id", ondelete="CASCADE"), nullable=False)
    request_type = Column(_enum_column(RequestType), nullable=False)
    current_value = Column(String, nullable=True)
    requested_value = Column(String, nullable=False)
    status = Column(_enum_column(RequestStatus), default=RequestStatus.PENDING, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    user = relationship("User", back_populates="requests")
    admin = relationship("Admin", back_populates="requests")
