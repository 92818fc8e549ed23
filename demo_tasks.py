"""
Demo Tasks Data for the Task Manager
Due dates are relative to the day the seed runs so the dashboard always has
overdue, due-today and upcoming work to show
"""

from datetime import date, timedelta

from app.models.task import TaskStatus, TaskPriority

today = date.today()

# Demo Tasks Data
# Structure: Title, Description, Project, Assignee, Assigner, Status, Priority, Due Date
DEMO_TASKS = [
    # WEBSITE REDESIGN
    {
        "title": "Design Homepage Mockup",
        "description": "Create wireframes and mockups for new homepage design",
        "project": "Website Redesign",
        "assigned_to": "employee1",
        "assigner": "manager1",
        "status": TaskStatus.COMPLETED,
        "priority": TaskPriority.HIGH,
        "due_date": today - timedelta(days=10),
    },
    {
        "title": "Implement Responsive Layout",
        "description": "Code responsive CSS for mobile and tablet devices",
        "project": "Website Redesign",
        "assigned_to": "employee2",
        "assigner": "manager1",
        "status": TaskStatus.IN_PROGRESS,
        "priority": TaskPriority.HIGH,
        "due_date": today,
    },
    {
        "title": "User Authentication Module",
        "description": "Implement login/logout and user management",
        "project": "Website Redesign",
        "assigned_to": "employee1",
        "assigner": "manager1",
        "status": TaskStatus.IN_PROGRESS,
        "priority": TaskPriority.HIGH,
        "due_date": today - timedelta(days=2),
    },
    {
        "title": "API Integration",
        "description": "Integrate with third-party APIs for data synchronization",
        "project": "Website Redesign",
        "assigned_to": None,
        "assigner": None,
        "status": TaskStatus.TODO,
        "priority": TaskPriority.MEDIUM,
        "due_date": today + timedelta(days=14),
    },

    # MOBILE APP DEVELOPMENT
    {
        "title": "iOS App Architecture",
        "description": "Design and implement iOS app architecture",
        "project": "Mobile App Development",
        "assigned_to": "employee1",
        "assigner": "manager1",
        "status": TaskStatus.TODO,
        "priority": TaskPriority.URGENT,
        "due_date": today + timedelta(days=7),
    },
    {
        "title": "Android App Architecture",
        "description": "Design and implement Android app architecture",
        "project": "Mobile App Development",
        "assigned_to": "employee2",
        "assigner": "manager1",
        "status": TaskStatus.TODO,
        "priority": TaskPriority.URGENT,
        "due_date": today + timedelta(days=7),
    },
    {
        "title": "UI/UX Design for Mobile",
        "description": "Create mobile-first design system",
        "project": "Mobile App Development",
        "assigned_to": "employee3",
        "assigner": "manager1",
        "status": TaskStatus.IN_PROGRESS,
        "priority": TaskPriority.HIGH,
        "due_date": None,
    },

    # DATABASE MIGRATION
    {
        "title": "Data Migration Script",
        "description": "Write scripts to migrate data from old to new database",
        "project": "Database Migration",
        "assigned_to": "employee1",
        "assigner": "manager2",
        "status": TaskStatus.COMPLETED,
        "priority": TaskPriority.HIGH,
        "due_date": today - timedelta(days=5),
    },
    {
        "title": "Performance Testing",
        "description": "Test database performance after migration",
        "project": "Database Migration",
        "assigned_to": "employee2",
        "assigner": "manager2",
        "status": TaskStatus.IN_PROGRESS,
        "priority": TaskPriority.MEDIUM,
        "due_date": today - timedelta(days=1),
    },
    {
        "title": "Backup Strategy Implementation",
        "description": "Implement automated backup procedures",
        "project": "Database Migration",
        "assigned_to": "employee3",
        "assigner": "manager2",
        "status": TaskStatus.TODO,
        "priority": TaskPriority.HIGH,
        "due_date": today + timedelta(days=3),
    },

    # SECURITY AUDIT
    {
        "title": "Penetration Testing",
        "description": "Conduct comprehensive penetration testing",
        "project": "Security Audit",
        "assigned_to": "employee1",
        "assigner": "manager1",
        "status": TaskStatus.COMPLETED,
        "priority": TaskPriority.URGENT,
        "due_date": today - timedelta(days=20),
    },
    {
        "title": "Security Report",
        "description": "Compile detailed security audit report",
        "project": "Security Audit",
        "assigned_to": "employee2",
        "assigner": "manager1",
        "status": TaskStatus.CANCELLED,
        "priority": TaskPriority.HIGH,
        "due_date": today - timedelta(days=15),
    },

    # TRAINING PROGRAM
    {
        "title": "Training Material Preparation",
        "description": "Prepare training materials and presentations",
        "project": "Training Program",
        "assigned_to": "employee3",
        "assigner": "manager2",
        "status": TaskStatus.TODO,
        "priority": TaskPriority.LOW,
        "due_date": today + timedelta(days=30),
    },
]
