from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.urls import reverse
from django.utils.html import format_html

from community.exceptions import ConflictError, ValidationError
from community.models import Comment, Competition, Post, Report, ReportStatus, User
from community.services import AdminService, ModerationService, ReportingService

moderation_service = ModerationService()
reporting_service = ReportingService()
admin_service = AdminService()

ADMIN_REJECTION_REASON = "Rejected by an administrator."


class ReportInline(admin.TabularInline):
    """Show open reports directly on the post / competition page."""
    model = Report
    fk_name = "post"
    extra = 0
    can_delete = False
    fields = ["reporter", "reason", "description", "created_at"]
    readonly_fields = fields

    def get_queryset(self, request):
        """Only show unresolved reports inline."""
        return super().get_queryset(request).filter(status=ReportStatus.PENDING)

    def has_add_permission(self, request, obj=None):
        return False


class CompetitionReportInline(ReportInline):
    fk_name = "competition"


class ModeratedContentAdmin(admin.ModelAdmin):
    """Shared moderation actions; every status change goes through ModerationService."""
    list_filter = ("moderation_status", "is_active", "college", "created_at")
    readonly_fields = (
        "author", "college", "anon_id", "display_name",
        "moderation_status", "moderation_reason", "moderated_by", "moderated_at",
        "created_at", "updated_at",
    )
    actions = ["approve_content", "reject_content"]

    def _decide(self, request, queryset, decision, reason=None):
        applied = conflicts = 0
        for item in queryset:
            try:
                moderation_service.moderate(type(item), item.pk, decision, request.user, reason=reason)
                applied += 1
            except ConflictError:
                conflicts += 1
        if applied:
            self.message_user(request, f"{applied} item(s) {decision}.", messages.SUCCESS)
        if conflicts:
            self.message_user(
                request,
                f"{conflicts} item(s) skipped: already decided by another admin.",
                messages.WARNING,
            )

    @admin.action(description="Approve selected items")
    def approve_content(self, request, queryset):
        self._decide(request, queryset, "approved")

    @admin.action(description="Reject selected items")
    def reject_content(self, request, queryset):
        self._decide(request, queryset, "rejected", reason=ADMIN_REJECTION_REASON)


@admin.register(Post)
class PostAdmin(ModeratedContentAdmin):
    """Admin configuration for posts with moderation actions."""
    list_display = ("title", "anon_id", "college", "moderation_status", "is_pinned", "is_active", "report_count_display")
    search_fields = ("title", "content", "anon_id", "author__email")
    inlines = [ReportInline]

    def report_count_display(self, obj):
        """Return formatted count of open reports."""
        count = obj.reports.filter(status=ReportStatus.PENDING).count()
        if count > 0:
            return format_html('<span style="color:red; font-weight:bold;">{} Reports</span>', count)
        return "0"
    report_count_display.short_description = "Open reports"


@admin.register(Competition)
class CompetitionAdmin(ModeratedContentAdmin):
    list_display = ("title", "anon_id", "college", "moderation_status", "expires_at", "total_votes", "is_active")
    search_fields = ("title", "description", "anon_id")
    inlines = [CompetitionReportInline]


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    """Admin configuration for comments."""
    list_display = ("short_text", "anon_id", "college", "post", "is_active", "created_at")
    list_filter = ("is_active", "college", "created_at")
    search_fields = ("content", "anon_id")
    actions = ["remove_comments"]

    def short_text(self, obj):
        """Shorten comment text for list display."""
        return obj.content[:50] + "..." if len(obj.content) > 50 else obj.content

    @admin.action(description="Remove selected comments")
    def remove_comments(self, request, queryset):
        queryset.update(is_active=False)


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    """Admin configuration for user-submitted reports."""
    list_display = ("target_object", "reason", "reporter", "status", "created_at")
    list_filter = ("status", "reason", "created_at")
    readonly_fields = (
        "reporter", "post", "competition", "reason", "description",
        "status", "admin_notes", "reviewed_by", "reviewed_at", "created_at",
    )
    actions = ["mark_resolved", "mark_dismissed"]

    def target_object(self, obj):
        """Return a link to the reported object for quick navigation."""
        if obj.post_id:
            link = reverse("admin:community_post_change", args=[obj.post_id])
            return format_html('<a href="{}">Post: {}</a>', link, obj.post.title)
        link = reverse("admin:community_competition_change", args=[obj.competition_id])
        return format_html('<a href="{}">Competition: {}</a>', link, obj.competition.title)
    target_object.short_description = "Reported content"

    def _review(self, request, queryset, decision):
        reviewed = 0
        for report in queryset.filter(status=ReportStatus.PENDING):
            try:
                reporting_service.resolve(report.pk, decision, request.user)
                reviewed += 1
            except ConflictError:
                continue
        self.message_user(request, f"{reviewed} report(s) {decision}.")

    @admin.action(description="Mark selected reports as resolved")
    def mark_resolved(self, request, queryset):
        self._review(request, queryset, ReportStatus.RESOLVED)

    @admin.action(description="Dismiss selected reports")
    def mark_dismissed(self, request, queryset):
        self._review(request, queryset, ReportStatus.DISMISSED)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "anon_id", "college", "is_admin", "is_blocked")
    list_filter = ("is_admin", "is_blocked", "college")
    search_fields = ("username", "email", "anon_id")
    # college is fixed at registration; admin and block flags change only through the actions below
    readonly_fields = ("anon_id", "college", "is_admin", "is_blocked", "blocked_at", "block_reason")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Community", {"fields": ("anon_id", "college", "display_name", "is_admin", "is_blocked", "blocked_at", "block_reason")}),
    )
    actions = ["block_users", "unblock_users", "toggle_admin_status"]

    @admin.action(description="Block selected users")
    def block_users(self, request, queryset):
        blocked = 0
        for user in queryset.exclude(pk=request.user.pk).filter(is_admin=False):
            admin_service.block_user(request.user, user.pk, "Blocked from the admin site.")
            blocked += 1
        self.message_user(request, f"{blocked} user(s) blocked.")

    @admin.action(description="Unblock selected users")
    def unblock_users(self, request, queryset):
        for user in queryset.filter(is_blocked=True):
            admin_service.unblock_user(request.user, user.pk)

    @admin.action(description="Grant or revoke community admin rights")
    def toggle_admin_status(self, request, queryset):
        for user in queryset:
            try:
                updated = admin_service.toggle_admin(request.user, user.pk)
            except ValidationError as exc:
                self.message_user(request, f"{user}: {exc.detail}", messages.WARNING)
                continue
            state = "is now" if updated.is_admin else "is no longer"
            self.message_user(request, f"{updated} {state} a community admin.")
