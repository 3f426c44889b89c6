from .admin import AdminService
from .comments import CommentService
from .competitions import CompetitionService
from .moderation import ModerationService
from .posts import PostService
from .reporting import ReportingService
from .visibility import Visibility, VisibilityPolicy

__all__ = [
    "AdminService",
    "CommentService",
    "CompetitionService",
    "ModerationService",
    "PostService",
    "ReportingService",
    "Visibility",
    "VisibilityPolicy",
]
