from pyboxer.resources.collection import PaginatedCollection
from pyboxer.resources.resource import Resource
from pyboxer.resources.user import User

__all__ = ["Resource", "PaginatedCollection", "User"]
