from django.apps import AppConfig


class ProspectsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'app.workspace.prospects'
    label = 'prospects'
    verbose_name = 'Prospects (Buyers & Sellers)'

    def ready(self):
        from .sharing import register_sharing_descriptors
        register_sharing_descriptors()
