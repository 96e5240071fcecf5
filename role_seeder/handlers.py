"""
Signal handlers for the role seeder.

Seeds the configured users, roles and role mappings once the database schema is
in place, when the project opts in with ROLE_SEEDER_SEED_ON_MIGRATE.
"""

import logging

from django.conf import settings

from role_seeder.api.data import SeedConfig
from role_seeder.api.seeding import seed_models_sync
from role_seeder.constants import SEED_CONFIG_SETTING, SEED_ON_MIGRATE_SETTING

logger = logging.getLogger(__name__)


def seed_on_post_migrate(sender, **kwargs):  # pylint: disable=unused-argument
    """
    Seed users, roles and role mappings after ``migrate`` has run.

    The handler is connected for the role_seeder app config only, so it runs once
    per ``migrate`` invocation. Errors are not caught: a project that asked for
    seeding at bootstrap should not start with partially seeded roles unnoticed.

    Args:
        sender: The AppConfig the signal was sent for.
        **kwargs: Additional keyword arguments from the signal.
    """
    if not getattr(settings, SEED_ON_MIGRATE_SETTING, False):
        return

    config = SeedConfig.from_settings()
    if config is None:
        logger.warning(f"{SEED_ON_MIGRATE_SETTING} is enabled but {SEED_CONFIG_SETTING} is not set, skipping seeding.")
        return

    logger.info("Seeding roles and users after migrate.")
    seed_models_sync(config)
