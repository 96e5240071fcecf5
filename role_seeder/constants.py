"""Setting names and defaults used by the role seeder."""

SEED_CONFIG_SETTING = "ROLE_SEEDER_CONFIG"
ROLE_MODEL_SETTING = "ROLE_SEEDER_ROLE_MODEL"
ROLE_MAPPING_MODEL_SETTING = "ROLE_SEEDER_ROLE_MAPPING_MODEL"
SEED_ON_MIGRATE_SETTING = "ROLE_SEEDER_SEED_ON_MIGRATE"

DEFAULT_ROLE_MODEL = "role_seeder.Role"
DEFAULT_ROLE_MAPPING_MODEL = "role_seeder.RoleMapping"

# Field used to match seed records against rows when the model has no USERNAME_FIELD
DEFAULT_NATURAL_KEY_FIELD = "name"

# Reverse accessor from a role to its principals (RoleMapping rows)
PRINCIPALS_RELATED_NAME = "principals"
