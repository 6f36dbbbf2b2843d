# backend/navigation/admin.py
from django.contrib import admin

from .models import Menu, MenuItem


class MenuItemInline(admin.TabularInline):
    model = MenuItem
    extra = 1
    fields = ("label", "link", "link_target", "parent", "position", "is_active")


@admin.register(Menu)
class MenuAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "handle", "location", "is_active")
    list_filter = ("location", "is_active")
    search_fields = ("name", "handle")
    prepopulated_fields = {"handle": ("name",)}
    inlines = [MenuItemInline]


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("id", "label", "menu", "parent", "position", "is_active")
    list_filter = ("menu", "link_target", "is_active")
    search_fields = ("label", "link")
    ordering = ("menu", "position")
