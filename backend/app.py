from __future__ import annotations

import logging

from acoustica import config, create_app
from acoustica.db import create_client, ping

logging.basicConfig(
    level=config.get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

# The client stays open for the lifetime of the process.
client = create_client(config.get_mongo_uri())

app = create_app(
    client[config.get_db_name()],
    config_overrides={"ACCESS_TOKEN_SECRET": config.get_token_secret()},
)


if __name__ == "__main__":
    ping(client)
    port = config.get_port()
    logger.info("Acoustica backend listening on port %s", port)
    app.run(host="0.0.0.0", port=port, debug=config.debug_enabled())
