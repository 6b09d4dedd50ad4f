"""
Subjects App - Admin
"""

from django.contrib import admin

from vaxi_backend.subjects.models import Subject


@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "relation", "owner", "date_of_birth", "country", "is_active")
    list_filter = ("relation", "is_active", "country")
    search_fields = ("full_name", "owner__username")
    ordering = ("owner", "id")
    list_per_page = 50
    readonly_fields = ("id", "created_at", "updated_at")
