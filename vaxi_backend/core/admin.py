"""
VaxiApp - Admin classes for users, roles and the audit log.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import AuditLog, Role, User


admin.site.site_header = "VaxiApp – Vaccination Planner"
admin.site.site_title = "VaxiApp Admin"


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("name", "label", "user_count")
    search_fields = ("name", "label")

    def user_count(self, obj):
        return obj.users.count()
    user_count.short_description = "Users"


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ("username", "email", "first_name", "last_name", "role", "is_active")
    list_filter = ("role", "is_active", "is_staff")
    fieldsets = DjangoUserAdmin.fieldsets + (
        ("VaxiApp", {"fields": ("role", "phone_number")}),
    )


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "action", "role_name", "user", "subject_id")
    list_filter = ("action", "role_name")
    search_fields = ("action", "subject_id")
    readonly_fields = ("user", "role_name", "action", "subject_id", "timestamp", "meta")

    def has_add_permission(self, request):
        return False
