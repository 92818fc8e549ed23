"""
Demo Projects Data for the Task Manager
Creators are referenced by username and resolved when seeding
"""

# Demo Projects Data
# Structure: Project Name, Description, Status, Creator
DEMO_PROJECTS = [
    {
        "name": "Website Redesign",
        "description": "Complete redesign of company website with modern UI/UX",
        "status": "ACTIVE",
        "creator": "manager1",
    },
    {
        "name": "Mobile App Development",
        "description": "Develop mobile application for iOS and Android",
        "status": "ACTIVE",
        "creator": "manager1",
    },
    {
        "name": "Database Migration",
        "description": "Migrate legacy database to new cloud infrastructure",
        "status": "ACTIVE",
        "creator": "manager2",
    },
    {
        "name": "Security Audit",
        "description": "Comprehensive security audit of all systems",
        "status": "COMPLETED",
        "creator": "manager1",
    },
    {
        "name": "Training Program",
        "description": "Employee training program for new technologies",
        "status": "PAUSED",
        "creator": "manager2",
    },
]
