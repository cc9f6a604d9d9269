"""
Demo Users Data for the Task Dashboard
One manager and a handful of employees, plus an inactive account that
must never appear in team performance
"""

from app.models.user import UserRole

DEMO_USERS = [
    {
        "username": "rajesh.kumar",
        "email": "rajesh.kumar@company.com",
        "role": UserRole.MANAGER,
        "is_active": True
    },
    {
        "username": "priya.sharma",
        "email": "priya.sharma@company.com",
        "role": UserRole.EMPLOYEE,
        "is_active": True
    },
    {
        "username": "amit.patel",
        "email": "amit.patel@company.com",
        "role": UserRole.EMPLOYEE,
        "is_active": True
    },
    {
        "username": "sneha.reddy",
        "email": "sneha.reddy@company.com",
        "role": UserRole.EMPLOYEE,
        "is_active": True
    },
    {
        "username": "vikram.singh",
        "email": "vikram.singh@company.com",
        "role": UserRole.EMPLOYEE,
        "is_active": False
    },
]
