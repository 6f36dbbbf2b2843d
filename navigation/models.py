# backend/navigation/models.py
from django.db import models

from .links import menu_handle
from .tree import DEFAULT_LABEL, DEFAULT_LINK, LinkTarget


class Menu(models.Model):
    LOCATION_HEADER = "header"
    LOCATION_FOOTER = "footer"
    LOCATION_SIDEBAR = "sidebar"

    LOCATION_CHOICES = [
        (LOCATION_HEADER, "Header"),
        (LOCATION_FOOTER, "Footer"),
        (LOCATION_SIDEBAR, "Sidebar"),
    ]

    name = models.CharField(max_length=120)
    handle = models.SlugField(
        max_length=140,
        unique=True,
        blank=True,
        help_text="Generated from the name when left empty, e.g. 'main-menu'.",
    )
    location = models.CharField(
        max_length=20,
        choices=LOCATION_CHOICES,
        default=LOCATION_HEADER,
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["location", "name"]
        verbose_name = "Menu"
        verbose_name_plural = "Menus"

    def __str__(self) -> str:
        return f"{self.name} ({self.location})"

    def save(self, *args, **kwargs):
        if not self.handle:
            base = menu_handle(self.name)
            handle, suffix = base, 2
            while Menu.objects.filter(handle=handle).exclude(pk=self.pk).exists():
                handle = f"{base}-{suffix}"
                suffix += 1
            self.handle = handle
        super().save(*args, **kwargs)


class MenuItem(models.Model):
    menu = models.ForeignKey(
        Menu,
        on_delete=models.CASCADE,
        related_name="items",
    )
    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="children",
    )
    label = models.CharField(max_length=255, default=DEFAULT_LABEL)
    link = models.CharField(
        max_length=512,
        default=DEFAULT_LINK,
        help_text="Route or external URL, e.g. '/about' or 'https://example.com'.",
    )
    link_target = models.CharField(
        max_length=20,
        choices=LinkTarget.choices,
        default=LinkTarget.SAME_WINDOW,
    )
    position = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["menu", "position", "id"]
        verbose_name = "Menu Item"
        verbose_name_plural = "Menu Items"

    def __str__(self) -> str:
        return self.label
