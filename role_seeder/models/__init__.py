"""Database models for the role seeder.

Users are stored by the project's user model (``get_user_model()``); this
application only ships the models for roles and for the mappings that grant
a role to a principal. Projects with their own role tables can point the
seeder at them through the ROLE_SEEDER_ROLE_MODEL and
ROLE_SEEDER_ROLE_MAPPING_MODEL settings.
"""

from role_seeder.models.core import *
