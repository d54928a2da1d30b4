"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the report logic lives in the services.
"""

import asyncio
import importlib

from config import get_settings_module

from congregation.container import build_container


async def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    for result in await container.lapse_report_service.get_lapsed_members():
        print(result.tier, result.elapsed_days, result.person.display_name)


if __name__ == "__main__":
    asyncio.run(main())
