"""Public API for the role seeder.

This module exposes the configuration types, the model resolution helpers and
the seeding pipeline so projects can seed from their own bootstrap code as
well as through the ``seed_roles`` management command.
"""

from role_seeder.api.data import *
from role_seeder.api.resolver import *
from role_seeder.api.seeding import *
