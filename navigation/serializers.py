# backend/navigation/serializers.py
from rest_framework import serializers

from .converters import item_to_dict, nestify
from .models import Menu
from .persistence import load_menu_records
from .tree import LinkTarget, MenuItem


class MenuSerializer(serializers.ModelSerializer):
    handle = serializers.SlugField(max_length=140, required=False, allow_blank=True)

    class Meta:
        model = Menu
        fields = ["id", "name", "handle", "location", "is_active", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]

    def validate_handle(self, value):
        if not value:
            return value
        qs = Menu.objects.filter(handle=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A menu with this handle already exists.")
        return value


class MenuItemPayloadSerializer(serializers.Serializer):
    """
    One record of the wire shape. ``children`` is optional, so both flat
    and nested payloads validate.
    """

    id = serializers.CharField(max_length=64)
    label = serializers.CharField(max_length=255, allow_blank=True, default="New Item")
    link = serializers.CharField(max_length=512, allow_blank=True, default="/")
    linkTarget = serializers.ChoiceField(
        source="link_target",
        choices=LinkTarget.choices,
        default=LinkTarget.SAME_WINDOW.value,
    )
    position = serializers.IntegerField(min_value=0, default=0)
    parentId = serializers.CharField(
        source="parent_id",
        max_length=64,
        allow_null=True,
        allow_blank=True,
        default=None,
    )

    def get_fields(self):
        fields = super().get_fields()
        fields["children"] = MenuItemPayloadSerializer(many=True, required=False)
        return fields

    def to_record(self, data=None) -> MenuItem:
        data = self.validated_data if data is None else data
        return MenuItem(
            id=data["id"],
            label=data["label"],
            link=data["link"],
            link_target=data["link_target"],
            position=data["position"],
            parent_id=data.get("parent_id") or None,
            children=[self.to_record(child) for child in data.get("children", [])],
        )


class MenuItemsSerializer(serializers.Serializer):
    items = MenuItemPayloadSerializer(many=True)

    def to_records(self) -> list[MenuItem]:
        child = self.fields["items"].child
        return [child.to_record(data) for data in self.validated_data["items"]]


class MenuOperationSerializer(serializers.Serializer):
    OP_CHOICES = ["create", "update", "delete", "duplicate", "move", "preset"]

    op = serializers.ChoiceField(choices=OP_CHOICES)
    id = serializers.CharField(max_length=64, required=False)
    parentId = serializers.CharField(
        source="parent_id", max_length=64, required=False, allow_null=True
    )
    link = serializers.CharField(max_length=512, required=False)
    field = serializers.ChoiceField(
        choices=["label", "link", "linkTarget"], required=False
    )
    value = serializers.CharField(max_length=512, required=False, allow_blank=True)
    overId = serializers.CharField(
        source="over_id", max_length=64, required=False, allow_null=True
    )
    container = serializers.BooleanField(required=False, default=False)
    preset = serializers.CharField(max_length=64, required=False)

    REQUIRED = {
        "update": ("id", "field", "value"),
        "delete": ("id",),
        "duplicate": ("id",),
        "move": ("id",),
        "preset": ("preset",),
    }

    def validate(self, attrs):
        missing = [
            name for name in self.REQUIRED.get(attrs["op"], ()) if name not in attrs
        ]
        if missing:
            raise serializers.ValidationError(
                {name: "This field is required for this operation." for name in missing}
            )
        return attrs


class MenuEditSerializer(MenuItemsSerializer):
    operations = MenuOperationSerializer(many=True)


def records_payload(records, nested: bool = False) -> list[dict]:
    return [item_to_dict(record, nested=nested) for record in records]


class StorefrontMenuSerializer(serializers.ModelSerializer):
    items = serializers.SerializerMethodField()

    class Meta:
        model = Menu
        fields = ["id", "name", "handle", "location", "items"]

    def get_items(self, obj):
        return records_payload(nestify(load_menu_records(obj, active_only=True)), nested=True)
