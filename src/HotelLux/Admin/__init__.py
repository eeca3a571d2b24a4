# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""HotelLux admin client: user account management for the HotelLux back-end."""

__version__ = "0.1.0"
