from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from studyhall.container import db_config_from_settings
from studyhall.database.bootstrap import apply_schema


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = importlib.import_module(get_settings_module())
    config = db_config_from_settings(dict(settings.DB_CONFIG))

    count = apply_schema(config)
    logging.getLogger("init_db").info(
        "applied schema.sql -> %s@%s:%s/%s (%d statements)",
        config.user,
        config.host,
        config.port,
        config.database,
        count,
    )


if __name__ == "__main__":
    main()
