from django.apps import AppConfig


class CommunityConfig(AppConfig):
    """Django app config for the college community API."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'community'
    verbose_name = 'College community'
