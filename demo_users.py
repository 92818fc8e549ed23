"""
Demo Users Data for the Task Manager
Two managers and three employees; the administrator comes from the settings
"""

# Demo Users Data
# Structure: username, password, email, full name, role
DEMO_USERS = [
    # MANAGERS
    {
        "username": "manager1",
        "password": "password123",
        "email": "manager1@company.com",
        "full_name": "John Manager",
        "role": "MANAGER",
    },
    {
        "username": "manager2",
        "password": "password123",
        "email": "manager2@company.com",
        "full_name": "Sarah Manager",
        "role": "MANAGER",
    },

    # EMPLOYEES
    {
        "username": "employee1",
        "password": "password123",
        "email": "employee1@company.com",
        "full_name": "Alice Employee",
        "role": "EMPLOYEE",
    },
    {
        "username": "employee2",
        "password": "password123",
        "email": "employee2@company.com",
        "full_name": "Bob Employee",
        "role": "EMPLOYEE",
    },
    {
        "username": "employee3",
        "password": "password123",
        "email": "employee3@company.com",
        "full_name": "Charlie Employee",
        "role": "EMPLOYEE",
    },
]
