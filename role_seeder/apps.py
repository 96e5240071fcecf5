"""
role_seeder Django application initialization.
"""

from django.apps import AppConfig
from django.db.models.signals import post_migrate


class RoleSeederConfig(AppConfig):
    """
    Configuration for the role_seeder Django application.
    """

    name = "role_seeder"
    verbose_name = "Role Seeder"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        """Connect the bootstrap seeding handler.

        Seeding is not run here: the database may not be ready while the app
        registry is loading (e.g., while running ``makemigrations``). Instead the
        seed runs after ``migrate`` when ROLE_SEEDER_SEED_ON_MIGRATE is enabled.
        """
        from role_seeder.handlers import seed_on_post_migrate  # pylint: disable=import-outside-toplevel

        post_migrate.connect(seed_on_post_migrate, sender=self, dispatch_uid="role_seeder.seed_on_post_migrate")
