# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Operation namespace classes for the HotelLux admin client.

- EntityOperations: list, search, get and delete records of one entity set
- AsyncEntityOperations: awaitable adapter used by the dashboard controller
"""

__all__ = []
