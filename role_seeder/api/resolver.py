"""Resolution of the models the seeder writes to.

Models are resolved once per seeding run into a ``SeedModels`` registry, so the
rest of the pipeline receives model classes rather than names.
"""

from typing import Optional

from attrs import define
from django.apps import apps
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import models

from role_seeder.api.data import SeedConfig
from role_seeder.constants import (
    DEFAULT_NATURAL_KEY_FIELD,
    DEFAULT_ROLE_MAPPING_MODEL,
    DEFAULT_ROLE_MODEL,
    ROLE_MAPPING_MODEL_SETTING,
    ROLE_MODEL_SETTING,
)

__all__ = [
    "SeedModels",
    "resolve_models",
    "get_natural_key_field",
]


@define(frozen=True)
class SeedModels:
    """The model classes used for one seeding run.

    Attributes:
        user: Model the user records are written to.
        role: Model the role records are written to.
        role_mapping: Model holding the role-principal associations.
    """

    user: type[models.Model]
    role: type[models.Model]
    role_mapping: type[models.Model]


def _get_model(label: Optional[str], default_label: str) -> type[models.Model]:
    """Look up a model by its ``app_label.ModelName`` label.

    Raises:
        LookupError: If no installed app provides the model.
    """
    return apps.get_model(label or default_label)


def resolve_models(config: SeedConfig) -> SeedModels:
    """Resolve the User, Role and RoleMapping models for a configuration.

    A ``model`` given in a section takes precedence. Otherwise users go to the
    project's user model and roles and mappings go to the models named by the
    ROLE_SEEDER_ROLE_MODEL and ROLE_SEEDER_ROLE_MAPPING_MODEL settings.

    Args:
        config: The seed configuration.

    Returns:
        SeedModels: The resolved model classes.

    Raises:
        LookupError: If a configured model is not installed.
    """
    user_label = config.user.model if config.user else None
    role_label = config.role.model if config.role else None
    role_mapping_label = config.role_mapping.model if config.role_mapping else None

    return SeedModels(
        user=apps.get_model(user_label) if user_label else get_user_model(),
        role=_get_model(role_label, getattr(settings, ROLE_MODEL_SETTING, DEFAULT_ROLE_MODEL)),
        role_mapping=_get_model(
            role_mapping_label,
            getattr(settings, ROLE_MAPPING_MODEL_SETTING, DEFAULT_ROLE_MAPPING_MODEL),
        ),
    )


def get_natural_key_field(model: type[models.Model]) -> str:
    """Get the field seed records are matched on.

    User models declare it through ``USERNAME_FIELD``; any other model is
    matched on ``name``.

    Args:
        model: The model class.

    Returns:
        str: The field name.
    """
    return getattr(model, "USERNAME_FIELD", DEFAULT_NATURAL_KEY_FIELD)
