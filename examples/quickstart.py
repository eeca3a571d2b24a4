# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Interactive walkthrough of the user management dashboard.

Signs in through the browser, lists user accounts, then accepts commands:
``search <term>``, ``view <id>``, ``edit <id>``, ``delete <id>``, ``reload``
and ``logout``.
"""

import asyncio
import logging
import sys

from azure.identity import InteractiveBrowserCredential

from HotelLux.Admin.client import AdminClient
from HotelLux.Admin.core.config import AdminConfig
from HotelLux.Admin.core.telemetry import TelemetryConfig
from HotelLux.Admin.ui.navigation import HistoryRouter
from HotelLux.Admin.ui.operator import ConsoleOperator


def show(dashboard) -> None:
	if not dashboard.entities:
		print("(no users)")
	for entity in dashboard.entities:
		print(f"  {entity.id:>6}  {entity.display_name():<24} {entity.get('email', '')}")


async def run(base_url: str) -> None:
	config = AdminConfig(telemetry=TelemetryConfig(enable_logging=True, log_level="WARNING"))
	router = HistoryRouter()
	router.subscribe(lambda route: print(f"-> {route.url}"))

	with AdminClient(base_url, InteractiveBrowserCredential(), config) as client:
		dashboard = client.dashboard(router, ConsoleOperator())
		await dashboard.initialize()
		show(dashboard)

		while True:
			try:
				line = (await asyncio.to_thread(input, "admin> ")).strip()
			except EOFError:
				break
			command, _, arg = line.partition(" ")
			if command == "search":
				await dashboard.search(arg)
				show(dashboard)
			elif command == "reload":
				await dashboard.load_all()
				show(dashboard)
			elif command in ("view", "edit", "delete") and arg:
				entity_id = int(arg) if arg.isdigit() else arg
				if command == "view":
					dashboard.view_details(entity_id)
				elif command == "edit":
					dashboard.edit_entity(entity_id)
				elif await dashboard.delete(entity_id):
					show(dashboard)
			elif command == "logout":
				dashboard.logout()
				break
			elif command:
				print("commands: search <term> | view <id> | edit <id> | delete <id> | reload | logout")


def main() -> None:
	logging.basicConfig(level=logging.WARNING)
	entered = input("Enter HotelLux admin URL (e.g. https://admin.hotellux.example): ").strip()
	if not entered:
		print("No URL entered; exiting.")
		sys.exit(1)
	asyncio.run(run(entered))


if __name__ == "__main__":
	main()
