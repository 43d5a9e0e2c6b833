from django.apps import AppConfig


class IndustriesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'app.workspace.industries'
    label = 'industries'
    verbose_name = 'Industry Taxonomy'
