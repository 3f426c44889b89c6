from django.urls import path

from community.views import admin, comments, competitions, posts, reports

urlpatterns = [
    path("posts/", posts.post_list, name="post_list"),
    path("posts/upload/", posts.post_image_upload, name="post_image_upload"),
    path("posts/mine/", posts.my_posts, name="my_posts"),
    path("posts/<uuid:post_id>/", posts.post_detail, name="post_detail"),
    path("posts/<uuid:post_id>/like/", posts.post_like, name="post_like"),
    path("posts/<uuid:post_id>/comments/", comments.post_comments, name="post_comments"),
    path("posts/<uuid:post_id>/report/", posts.post_report, name="post_report"),

    path("comments/mine/", comments.my_comments, name="my_comments"),
    path("comments/<uuid:comment_id>/", comments.comment_detail, name="comment_detail"),
    path("comments/<uuid:comment_id>/like/", comments.comment_like, name="comment_like"),

    path("competitions/", competitions.competition_list, name="competition_list"),
    path("competitions/<uuid:competition_id>/", competitions.competition_detail, name="competition_detail"),
    path("competitions/<uuid:competition_id>/vote/", competitions.competition_vote, name="competition_vote"),
    path("competitions/<uuid:competition_id>/results/", competitions.competition_results, name="competition_results"),
    path("competitions/<uuid:competition_id>/report/", competitions.competition_report, name="competition_report"),

    path("reports/mine/", reports.my_reports, name="my_reports"),

    path("admin/stats/", admin.stats, name="admin_stats"),
    path("admin/posts/", admin.moderation_queue, name="admin_posts"),
    path("admin/posts/<uuid:post_id>/", admin.delete_post, name="admin_delete_post"),
    path("admin/posts/<uuid:post_id>/moderate/", admin.moderate_post, name="admin_moderate_post"),
    path("admin/posts/<uuid:post_id>/pin/", admin.pin_post, name="admin_pin_post"),
    path("admin/competitions/", admin.competition_list, name="admin_competitions"),
    path("admin/competitions/<uuid:competition_id>/moderate/", admin.moderate_competition, name="admin_moderate_competition"),
    path("admin/reports/", admin.report_list, name="admin_reports"),
    path("admin/reports/<uuid:report_id>/resolve/", admin.resolve_report, name="admin_resolve_report"),
    path("admin/users/", admin.user_list, name="admin_users"),
    path("admin/users/<int:user_id>/block/", admin.block_user, name="admin_block_user"),
    path("admin/users/<int:user_id>/unblock/", admin.unblock_user, name="admin_unblock_user"),
    path("admin/users/<int:user_id>/toggle-admin/", admin.toggle_admin, name="admin_toggle_admin"),
    path("admin/comments/", admin.comment_list, name="admin_comments"),
    path("admin/comments/<uuid:comment_id>/", admin.delete_comment, name="admin_delete_comment"),
]
