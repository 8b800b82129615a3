import logging

from flask import Flask

from flixcloud import config
from flixcloud.api import api

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s:%(message)s",
)


def create_app() -> Flask:
    app = Flask(__name__)
    app.register_blueprint(api)
    return app


app = create_app()


if __name__ == "__main__":
    logging.info("Listening for FlixCloud notifications on port %s", config.PORT)
    app.run(host="0.0.0.0", port=config.PORT)
