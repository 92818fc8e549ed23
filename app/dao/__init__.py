from .base import BaseDAO
from .user_dao import UserDAO
from .project_dao import ProjectDAO
from .task_dao import TaskDAO
