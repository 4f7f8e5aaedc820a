from . import assistant, draft, resume

__all__ = ["assistant", "draft", "resume"]
