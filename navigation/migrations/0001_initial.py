import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Menu",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                (
                    "handle",
                    models.SlugField(
                        blank=True,
                        help_text="Generated from the name when left empty, e.g. 'main-menu'.",
                        max_length=140,
                        unique=True,
                    ),
                ),
                (
                    "location",
                    models.CharField(
                        choices=[("header", "Header"), ("footer", "Footer"), ("sidebar", "Sidebar")],
                        default="header",
                        max_length=20,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Menu",
                "verbose_name_plural": "Menus",
                "ordering": ["location", "name"],
            },
        ),
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("label", models.CharField(default="New Item", max_length=255)),
                (
                    "link",
                    models.CharField(
                        default="/",
                        help_text="Route or external URL, e.g. '/about' or 'https://example.com'.",
                        max_length=512,
                    ),
                ),
                (
                    "link_target",
                    models.CharField(
                        choices=[("same-window", "Same window"), ("new-window", "New window")],
                        default="same-window",
                        max_length=20,
                    ),
                ),
                ("position", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "menu",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="navigation.menu",
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="children",
                        to="navigation.menuitem",
                    ),
                ),
            ],
            options={
                "verbose_name": "Menu Item",
                "verbose_name_plural": "Menu Items",
                "ordering": ["menu", "position", "id"],
            },
        ),
    ]
