# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""Shared constants for the HotelLux admin client."""
