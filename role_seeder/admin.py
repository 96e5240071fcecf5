"""Admin configuration for role_seeder."""

from django.contrib import admin

from role_seeder.models import Role, RoleMapping


class RoleMappingInline(admin.TabularInline):
    """Inline admin listing the principals a role is granted to."""

    model = RoleMapping
    extra = 0
    fields = ("principal_type", "principal_id", "created")
    readonly_fields = ("created",)


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    """Admin for Role with its principals inline."""

    list_display = ("id", "name", "description", "modified")
    search_fields = ("name", "description")
    inlines = [RoleMappingInline]


@admin.register(RoleMapping)
class RoleMappingAdmin(admin.ModelAdmin):
    """Admin for RoleMapping."""

    list_display = ("id", "role", "principal_type", "principal_id", "created")
    search_fields = ("principal_id", "role__name")
    list_filter = ("principal_type",)
