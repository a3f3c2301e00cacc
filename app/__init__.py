"""
Internship & Job Portal
REST API for students, companies, jobs, internships and applications.

Architecture:
- MongoDB: every entity (students carry gamification points/badges)
- FastAPI: HTTP layer with JWT bearer authentication
- Gamification: points and badges awarded when a student applies
"""

__version__ = "1.0.0"
