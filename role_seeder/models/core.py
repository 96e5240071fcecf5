"""Core models for roles and role mappings."""

from django.db import models

from role_seeder.constants import PRINCIPALS_RELATED_NAME

__all__ = ["Role", "RoleMapping"]


class Role(models.Model):
    """A named role that can be granted to principals.

    .. no_pii:
    """

    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, null=True)
    created = models.DateTimeField(auto_now_add=True)
    modified = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("name",)

    def __str__(self):
        return self.name


class RoleMapping(models.Model):
    """Association granting a role to a principal.

    .. no_pii:

    The principal is referenced by type and identifier rather than by a foreign
    key so the same table can map users, applications or other roles.
    """

    USER = "USER"
    APP = "APP"
    ROLE = "ROLE"

    PRINCIPAL_TYPE_CHOICES = (
        (USER, "User"),
        (APP, "Application"),
        (ROLE, "Role"),
    )

    principal_type = models.CharField(max_length=32, choices=PRINCIPAL_TYPE_CHOICES)
    principal_id = models.CharField(max_length=255, db_index=True)
    role = models.ForeignKey(
        Role,
        on_delete=models.CASCADE,
        related_name=PRINCIPALS_RELATED_NAME,
    )
    created = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Role Mapping"
        verbose_name_plural = "Role Mappings"

    def __str__(self):
        return f"{self.principal_type}:{self.principal_id} -> {self.role_id}"
