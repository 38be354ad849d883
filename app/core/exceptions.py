"""
Application errors.

HTTP-facing errors subclass HTTPException so routes can raise them directly.
Platform errors stay internal: the notification gateway logs and absorbs them.
"""

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base for errors returned to API clients."""

    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)


class PlantNotFoundException(AppException):
    """No plant with this id in the collection."""

    def __init__(self, plant_id: str):
        self.plant_id = plant_id
        super().__init__(detail=f"Plant {plant_id} not found", status_code=status.HTTP_404_NOT_FOUND)


class NotificationPlatformError(Exception):
    """A notification platform refused or failed a request."""


class DuplicateReminderError(NotificationPlatformError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Reminder {identifier} already scheduled")
