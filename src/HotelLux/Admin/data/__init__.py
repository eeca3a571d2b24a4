# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""Internal REST data access for the HotelLux admin client."""
