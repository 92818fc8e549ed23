from .user import UserRecord, UserCreate, UserLogin, UserUpdate, PasswordChange
from .tokens import Token
from .project import ProjectRecord, ProjectCreate, ProjectUpdate, ProjectStatusUpdate, ProjectStatistics, ProjectWithTaskCounts
from .task import TaskRecord, TaskCreate, TaskUpdate, TaskStatusUpdate, TaskAssign, TaskStatistics, UserTaskStatistics
from .dashboard import Navigation, NavigationItem, DashboardOverview, GlobalOverview, PersonalOverview, Activity
