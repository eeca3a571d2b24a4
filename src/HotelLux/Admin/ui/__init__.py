# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Presentation-side controllers and ports for the admin dashboard.

- :class:`~HotelLux.Admin.ui.entity_list.EntityListController`: list/search/view/edit/delete/logout
- :class:`~HotelLux.Admin.ui.navigation.HistoryRouter`: in-memory router
- :class:`~HotelLux.Admin.ui.operator.ConsoleOperator`: terminal confirmations and notices
"""

__all__ = []
