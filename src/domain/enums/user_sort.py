"""Sort orders for the user listing."""

from enum import Enum


class UserSort(str, Enum):
    """User listing sort order.

    NAME sorts by last then first name, EMAIL alphabetically, CREATED newest
    first. CREATED is the default.
    """

    NAME = "name"
    EMAIL = "email"
    CREATED = "created"
