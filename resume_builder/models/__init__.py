from . import resume, user

__all__ = ["resume", "user"]
