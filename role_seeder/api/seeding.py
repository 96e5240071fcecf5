"""Seeding of users, roles and role mappings.

Seeding runs as a three stage pipeline: roles first, then users, then the role
mappings linking them, since a mapping needs both the user and the role rows.
Within a stage every record is written concurrently through Django's async ORM
interface and the stage finishes when all of its writes have completed. The
first failure aborts the pipeline and is re-raised unchanged. There is no
transaction around the pipeline, so rows written before the failure are kept.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Optional

from asgiref.sync import async_to_sync
from django.db import models

from role_seeder.api.data import RoleMappingPair, SeedConfig, SeedRecord
from role_seeder.api.resolver import get_natural_key_field, resolve_models
from role_seeder.constants import PRINCIPALS_RELATED_NAME

logger = logging.getLogger(__name__)

__all__ = [
    "add_update_model",
    "add_role_mapping",
    "seed_models",
    "seed_models_sync",
]

DESCRIPTION_FIELD = "description"
PASSWORD_FIELD = "password"


def _has_field(model: type[models.Model], field_name: str) -> bool:
    return any(field.name == field_name for field in model._meta.get_fields())


def _hashes_password(model: type[models.Model]) -> bool:
    return callable(getattr(model, "set_password", None))


def _build_defaults(model: type[models.Model], record: SeedRecord) -> dict:
    """Get the column values written for a record, besides its natural key."""
    defaults = dict(record.fields)
    defaults.pop(get_natural_key_field(model), None)
    if _hashes_password(model):
        defaults.pop(PASSWORD_FIELD, None)
    if record.description is not None and _has_field(model, DESCRIPTION_FIELD):
        defaults[DESCRIPTION_FIELD] = record.description
    return defaults


def _natural_key(model: type[models.Model], record: SeedRecord) -> dict:
    """Get the lookup matching a record's row.

    A record carrying the model's key field explicitly (e.g. ``username`` next to
    ``name`` for a user) is matched on that value, otherwise on its name.
    """
    key_field = get_natural_key_field(model)
    return {key_field: record.fields.get(key_field, record.name)}


async def _set_password(instance: models.Model, record: SeedRecord) -> None:
    """Hash and store the record's password, if it has one and the model supports it."""
    password = record.fields.get(PASSWORD_FIELD)
    if password is None or not _hashes_password(type(instance)):
        return
    instance.set_password(password)
    await instance.asave(update_fields=[PASSWORD_FIELD])


async def _find_or_create(model: type[models.Model], record: SeedRecord) -> models.Model:
    """Get the row matching the record's name, creating it from the record if absent."""
    instance, created = await model.objects.aget_or_create(
        **_natural_key(model, record),
        defaults=_build_defaults(model, record),
    )
    if created:
        await _set_password(instance, record)
    return instance


async def _overwrite(model: type[models.Model], record: SeedRecord) -> models.Model:
    """Create the row for the record, replacing its content if it already exists."""
    instance, _ = await model.objects.aupdate_or_create(
        **_natural_key(model, record),
        defaults=_build_defaults(model, record),
    )
    await _set_password(instance, record)
    return instance


def add_update_model(
    model: type[models.Model],
    records: Optional[list[SeedRecord]],
    overwrite: bool = False,
) -> list[Awaitable[models.Model]]:
    """Add or update one row per record in a model.

    Args:
        model: The model to write to.
        records: The records to write. None or an empty list writes nothing.
        overwrite: True to replace existing rows with the record content, False
            to leave rows that already exist untouched.

    Returns:
        list[Awaitable]: One pending write per record, resolving to the saved instance.
    """
    if not records:
        return []

    write = _overwrite if overwrite else _find_or_create
    return [write(model, record) for record in records]


def _find_item(items: list[models.Model], prop: str, value: str) -> Optional[models.Model]:
    """Get the first item whose ``prop`` attribute equals ``value``, or None."""
    for item in items:
        if getattr(item, prop, None) == value:
            return item
    return None


def add_role_mapping(
    model: type[models.Model],
    mappings: Optional[list[RoleMappingPair]],
    users: Optional[list[models.Model]],
    roles: Optional[list[models.Model]],
) -> list[Optional[Awaitable[models.Model]]]:
    """Grant roles to users by creating one role mapping per pair.

    A pair is skipped, leaving None in its slot, when its user is not among
    ``users`` or its role is not among ``roles``.

    Args:
        model: The role mapping model. Its ``USER`` attribute is used as principal type.
        mappings: The (user, role) pairs to link.
        users: User instances, matched on their natural key field.
        roles: Role instances, matched on ``name``.

    Returns:
        list: One pending write or None per pair, in the order of ``mappings``.
            Empty if any of the inputs is empty.
    """
    if not (mappings and users and roles):
        return []

    principal_type = model.USER
    user_key_field = get_natural_key_field(type(users[0]))

    # Resolve every pair before creating any coroutine, so a lookup error leaves none un-awaited
    grants = []
    for pair in mappings:
        user = _find_item(users, user_key_field, pair.user)
        role = _find_item(roles, "name", pair.role)

        if user is None or role is None:
            logger.debug(f"Skipping role mapping {pair.user} -> {pair.role}: user or role not seeded.")
            grants.append(None)
            continue

        grants.append((getattr(role, PRINCIPALS_RELATED_NAME), str(user.pk)))

    return [
        None if grant is None else grant[0].acreate(principal_type=principal_type, principal_id=grant[1])
        for grant in grants
    ]


async def _gather(pending: list[Optional[Awaitable]]) -> list:
    """Wait for all pending writes, keeping None slots in place."""
    results = iter(await asyncio.gather(*(item for item in pending if item is not None)))
    return [None if item is None else next(results) for item in pending]


async def seed_models(config: SeedConfig) -> list:
    """Seed roles, users and role mappings from a configuration.

    Args:
        config: The seed configuration.

    Returns:
        list: The result of the role mapping stage, one created mapping or None per pair.

    Raises:
        Exception: Whatever the model lookup or the database raised, unchanged.
    """
    try:
        resolved = resolve_models(config)

        roles = await _gather(add_update_model(resolved.role, config.roles, config.overwrite))
        logger.info(f"Seeded {len(roles)} roles into {resolved.role.__name__}.")

        users = await _gather(add_update_model(resolved.user, config.users, config.overwrite))
        logger.info(f"Seeded {len(users)} users into {resolved.user.__name__}.")

        if config.role_mapping is None and (roles or users):
            logger.warning("No RoleMapping section configured, no roles will be granted to the seeded users.")

        mappings = await _gather(add_role_mapping(resolved.role_mapping, config.mappings, users, roles))
        logger.info(
            f"Created {sum(1 for mapping in mappings if mapping is not None)} role mappings "
            f"out of {len(config.mappings)} configured."
        )
        return mappings
    except Exception as e:
        logger.error(f"Error seeding roles and users: {e}")
        raise


def seed_models_sync(config: SeedConfig) -> list:
    """Run ``seed_models`` from synchronous code (management commands, signal handlers)."""
    return async_to_sync(seed_models)(config)
