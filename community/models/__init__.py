from .user import User
from .moderated import ModeratedContent, ModerationState, ModerationStatus
from .post import Post
from .comment import Comment
from .like import CommentLike, PostLike
from .competition import Competition, CompetitionOption, CompetitionVote
from .report import Report, ReportStatus

__all__ = [
    "User",
    "ModeratedContent",
    "ModerationState",
    "ModerationStatus",
    "Post",
    "Comment",
    "PostLike",
    "CommentLike",
    "Competition",
    "CompetitionOption",
    "CompetitionVote",
    "Report",
    "ReportStatus",
]
