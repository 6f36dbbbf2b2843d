# backend/navigation/views.py
import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from .conf import get_max_depth
from .converters import flatten, nestify
from .editor import MenuEditor
from .exceptions import MenuError
from .models import Menu
from .mutations import validate_depth
from .persistence import load_menu_records, save_menu_records
from .serializers import (
    MenuEditSerializer,
    MenuItemsSerializer,
    MenuSerializer,
    StorefrontMenuSerializer,
    records_payload,
)
from .tree import MenuTree

logger = logging.getLogger(__name__)


def menu_records(menu):
    """Flat records of ``menu`` in tree order (parents before children)."""
    return flatten(nestify(load_menu_records(menu)))


class MenuListView(APIView):
    """
    Returns active menus with their active items nested.

    Frontend usage:
      GET /api/navigation/menus/?location=header
      GET /api/navigation/menus/?handle=main-menu
    """

    permission_classes = [AllowAny]

    def get(self, request):
        qs = Menu.objects.filter(is_active=True)

        location = request.query_params.get("location")
        if location:
            qs = qs.filter(location=location)
        handle = request.query_params.get("handle")
        if handle:
            qs = qs.filter(handle=handle)

        serializer = StorefrontMenuSerializer(qs, many=True, context={"request": request})
        return Response(serializer.data)


def run_operation(editor: MenuEditor, operation: dict):
    """Apply one validated operation; returns the created id, if any."""
    op = operation["op"]
    if op == "create":
        return editor.create(operation.get("parent_id"), link=operation.get("link"))
    if op == "update":
        editor.update(operation["id"], operation["field"], operation["value"])
    elif op == "delete":
        editor.delete(operation["id"])
    elif op == "duplicate":
        return editor.duplicate(operation["id"])
    elif op == "move":
        editor.begin_drag(operation["id"])
        editor.hover_drag(operation.get("over_id"), container=operation.get("container", False))
        editor.end_drag()
    elif op == "preset":
        editor.apply_preset(operation["preset"])
    return None


class MenuViewSet(viewsets.ModelViewSet):
    """Admin CRUD for menus plus loading/saving of their item trees."""

    queryset = Menu.objects.all()
    serializer_class = MenuSerializer
    permission_classes = [IsAdminUser]

    @action(detail=True, methods=["get", "put"], url_path="items")
    def items(self, request, pk=None):
        menu = self.get_object()
        if request.method == "GET":
            return Response({"items": records_payload(menu_records(menu))})

        serializer = MenuItemsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            tree = validate_depth(
                MenuTree.from_nested(nestify(serializer.to_records())),
                get_max_depth(),
            )
        except MenuError as exc:
            raise ValidationError({"detail": str(exc)})

        ids = save_menu_records(menu, flatten(tree.to_nested()))
        return Response(
            {"items": records_payload(menu_records(menu)), "ids": ids},
            status=status.HTTP_200_OK,
        )

    @action(detail=True, methods=["post"], url_path="preview")
    def preview(self, request, pk=None):
        """Replay editor operations on the submitted items without saving."""
        self.get_object()
        serializer = MenuEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        created = []
        try:
            editor = MenuEditor(serializer.to_records(), max_depth=get_max_depth())
            for operation in serializer.validated_data["operations"]:
                new_id = run_operation(editor, operation)
                if new_id is not None:
                    created.append(new_id)
        except MenuError as exc:
            logger.info("Menu preview %s rejected: %s", pk, exc)
            raise ValidationError({"detail": str(exc)})

        return Response(
            {
                "items": records_payload(editor.records()),
                "created": created,
                "notices": editor.pop_notices(),
            }
        )
