"""Entry point for the traffic monitor API server."""

import logging
import sys

from traffic_monitor.config import load_config
from traffic_monitor.web import create_app


def main():
    config = load_config()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)
    logger.info(
        "Config: log_file=%s, bytes_file=%s, ignore_file=%s, web_dir=%s",
        config.log_file, config.bytes_file, config.ignore_file, config.web_dir,
    )

    app = create_app(config)
    logger.info("Traffic monitor API listening on http://%s:%d/", config.host, config.port)
    app.run(host=config.host, port=config.port, debug=config.debug, use_reloader=False)


# For gunicorn: `gunicorn 'traffic_monitor.web:create_app()'`
if __name__ == "__main__":
    main()
