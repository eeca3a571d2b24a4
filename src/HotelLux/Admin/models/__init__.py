# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Data models for the HotelLux admin client.

- :class:`~HotelLux.Admin.models.entity.Entity`: server-owned record with dict-like access.

Import models directly from their module files.
"""

__all__ = []
