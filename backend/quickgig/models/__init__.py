from .user import User
from .job import Job
from .application import Application

__all__ = ["User", "Job", "Application"]
