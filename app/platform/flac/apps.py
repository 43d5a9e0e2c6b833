from django.apps import AppConfig


class FieldLevelAccessConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'app.platform.flac'
    label = 'flac'
    verbose_name = 'Partner Field Sharing'

    def ready(self):
        # cache invalidation on PartnerSetting writes
        from . import signals  # noqa: F401
