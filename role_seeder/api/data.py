"""Data classes describing a seed configuration.

The configuration mirrors the shape projects usually keep in their settings::

    ROLE_SEEDER_CONFIG = {
        "overwrite": False,
        "Role": {"data": [{"name": "admin", "description": "Administrators"}]},
        "User": {"model": "accounts.User", "data": [{"name": "alice", "email": "alice@example.com"}]},
        "RoleMapping": {"data": [{"user": "alice", "role": "admin"}]},
    }

Every section is optional. Structural problems (a section that is not a mapping,
a record without a name, a malformed model label) raise ``ValueError`` while the
configuration is loaded, so seeding itself never has to check the shape again.
"""

import json
from typing import Optional

from attrs import define, field, validators
from django.conf import settings

from role_seeder.constants import SEED_CONFIG_SETTING

__all__ = [
    "SeedRecord",
    "RoleMappingPair",
    "ModelSeedConfig",
    "RoleMappingConfig",
    "SeedConfig",
]

MODEL_LABEL_SEPARATOR = "."
NAME_KEYS = ("name", "username")


def _non_empty_string(instance, attribute, value):
    """Validate that an attribute holds a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{type(instance).__name__}.{attribute.name} must be a non-empty string, got {value!r}")


def _boolean(instance, attribute, value):
    """Validate that an attribute holds a real boolean, not a truthy string."""
    if not isinstance(value, bool):
        raise ValueError(f"{type(instance).__name__}.{attribute.name} must be true or false, got {value!r}")


def _model_label(instance, attribute, value):
    """Validate an optional ``app_label.ModelName`` label."""
    if value is None:
        return
    if not isinstance(value, str) or value.count(MODEL_LABEL_SEPARATOR) != 1 or not all(value.split(".")):
        raise ValueError(
            f"{type(instance).__name__}.{attribute.name} must look like 'app_label.ModelName', got {value!r}"
        )


def _ensure_mapping(value, section: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"'{section}' must be a mapping, got {type(value).__name__}")
    return value


def _ensure_list(value, section: str) -> list:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"'{section}.data' must be a list, got {type(value).__name__}")
    return list(value)


@define(frozen=True)
class SeedRecord:
    """A single row to seed into a User or Role model.

    Attributes:
        name: Value of the model's natural key (role name or username).
        description: Optional description, written when the model has such a field.
        fields: Any other column values for the row (e.g. ``email`` or ``password``).

    Examples:
        >>> SeedRecord.from_dict({"username": "alice", "email": "alice@example.com"})
        SeedRecord(name='alice', description=None, fields={'email': 'alice@example.com'})
    """

    name: str = field(validator=_non_empty_string)
    description: Optional[str] = field(default=None, validator=validators.optional(validators.instance_of(str)))
    fields: dict = field(factory=dict, validator=validators.instance_of(dict))

    @classmethod
    def from_dict(cls, raw: dict) -> "SeedRecord":
        """Build a record from a raw configuration entry.

        The key can be given either as ``name`` or ``username``. Every other key
        except ``description`` ends up in ``fields``.

        Raises:
            ValueError: If the entry is not a mapping or has no name.
        """
        raw = dict(_ensure_mapping(raw, "data[]"))
        for key in NAME_KEYS:
            if key in raw:
                name = raw.pop(key)
                break
        else:
            raise ValueError(f"Seed record {raw!r} has no 'name' or 'username'")

        description = raw.pop("description", None)
        return cls(name=name, description=description, fields=raw)


@define(frozen=True)
class RoleMappingPair:
    """A request to grant ``role`` to the user named ``user``."""

    user: str = field(validator=_non_empty_string)
    role: str = field(validator=_non_empty_string)

    @classmethod
    def from_dict(cls, raw: dict) -> "RoleMappingPair":
        raw = _ensure_mapping(raw, "RoleMapping.data[]")
        return cls(user=raw.get("user"), role=raw.get("role"))


@define(frozen=True)
class ModelSeedConfig:
    """Seed section for a User or Role model.

    Attributes:
        model: Optional ``app_label.ModelName`` overriding the default model.
        data: Records to create or update.
    """

    model: Optional[str] = field(default=None, validator=_model_label)
    data: list[SeedRecord] = field(factory=list)

    @classmethod
    def from_dict(cls, raw: dict, section: str) -> "ModelSeedConfig":
        raw = _ensure_mapping(raw, section)
        records = [SeedRecord.from_dict(record) for record in _ensure_list(raw.get("data"), section)]
        return cls(model=raw.get("model"), data=records)


@define(frozen=True)
class RoleMappingConfig:
    """Seed section for the RoleMapping model."""

    model: Optional[str] = field(default=None, validator=_model_label)
    data: list[RoleMappingPair] = field(factory=list)

    @classmethod
    def from_dict(cls, raw: dict, section: str = "RoleMapping") -> "RoleMappingConfig":
        raw = _ensure_mapping(raw, section)
        pairs = [RoleMappingPair.from_dict(pair) for pair in _ensure_list(raw.get("data"), section)]
        return cls(model=raw.get("model"), data=pairs)


@define(frozen=True)
class SeedConfig:
    """Complete seed configuration.

    Attributes:
        overwrite: True to overwrite existing rows instead of leaving them untouched.
        user: Seed section for users, if any.
        role: Seed section for roles, if any.
        role_mapping: Seed section for role mappings, if any.
    """

    overwrite: bool = field(default=False, validator=_boolean)
    user: Optional[ModelSeedConfig] = None
    role: Optional[ModelSeedConfig] = None
    role_mapping: Optional[RoleMappingConfig] = None

    @property
    def users(self) -> list[SeedRecord]:
        return self.user.data if self.user else []

    @property
    def roles(self) -> list[SeedRecord]:
        return self.role.data if self.role else []

    @property
    def mappings(self) -> list[RoleMappingPair]:
        return self.role_mapping.data if self.role_mapping else []

    @classmethod
    def from_dict(cls, raw: dict) -> "SeedConfig":
        """Load a configuration from its dictionary form.

        Section keys can be spelled ``User``/``Role``/``RoleMapping`` or
        ``user``/``role``/``role_mapping``.

        Args:
            raw: The configuration dictionary.

        Returns:
            SeedConfig: The validated configuration.

        Raises:
            ValueError: If any section or record is malformed.
        """
        raw = _ensure_mapping(raw, "config")

        def section(*keys):
            for key in keys:
                if raw.get(key) is not None:
                    return key, raw[key]
            return None, None

        user_key, user = section("User", "user")
        role_key, role = section("Role", "role")
        mapping_key, mapping = section("RoleMapping", "role_mapping")

        return cls(
            overwrite=raw.get("overwrite", False),
            user=ModelSeedConfig.from_dict(user, user_key) if user_key else None,
            role=ModelSeedConfig.from_dict(role, role_key) if role_key else None,
            role_mapping=RoleMappingConfig.from_dict(mapping, mapping_key) if mapping_key else None,
        )

    @classmethod
    def from_settings(cls) -> Optional["SeedConfig"]:
        """Load the configuration from the ROLE_SEEDER_CONFIG setting.

        Returns:
            SeedConfig | None: The configuration, or None if the setting is unset or empty.
        """
        raw = getattr(settings, SEED_CONFIG_SETTING, None)
        if not raw:
            return None
        return cls.from_dict(raw)

    @classmethod
    def from_file(cls, path: str) -> "SeedConfig":
        """Load the configuration from a JSON file.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not valid JSON or the configuration is malformed.
        """
        with open(path, encoding="utf-8") as config_file:
            return cls.from_dict(json.load(config_file))
