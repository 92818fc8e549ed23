from .user import User, UserRole
from .project import Project, ProjectStatus
from .task import Task, TaskStatus, TaskPriority
