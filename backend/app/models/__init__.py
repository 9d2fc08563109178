from app.models.documents import Document
from app.models.projects import Project, ProjectMembership, ProjectStatus
from app.models.users import User

__all__ = [
    "Document",
    "Project",
    "ProjectMembership",
    "ProjectStatus",
    "User",
]
