#!/usr/bin/env python3
"""
Service-layer exceptions shared by the core and the web application.
"""


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class UserNotFoundException(ServiceException):
    """Raised when a user profile does not exist."""

    def __init__(self, user_id):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class RepositoryUnavailableException(ServiceException):
    """Raised when the backing store cannot be reached."""
    pass
