from django.apps import AppConfig


class RbacConfig(AppConfig):
    """Admin / staff / partner role checks shared by the API apps."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'app.platform.rbac'
    label = 'rbac'
    verbose_name = 'Roles & Partner Scope'
