# backend/navigation/exceptions.py


class MenuError(Exception):
    """Base class for menu editing failures."""


class MenuItemNotFound(MenuError, LookupError):
    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Menu item not found: {item_id}")


class MenuDepthExceeded(MenuError):
    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Maximum menu depth is {max_depth} levels")


class InvalidMenuField(MenuError, ValueError):
    pass


class DragStateError(MenuError):
    pass


class UnknownMenuPreset(MenuError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown menu preset: {name}")
