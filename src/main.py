import logging
import sys

import uvicorn

from configs.settings import EnvironmentVariableError
from dependencies.credentials import ConfigurationError
from factory import create_app


def main():
    """
    Build the app and serve it. Configuration errors stop the process before it starts listening.
    """
    try:
        app = create_app()
    except (ConfigurationError, EnvironmentVariableError) as e:
        logging.critical(e)
        sys.exit(1)

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
