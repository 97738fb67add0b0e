"""Entry point for the Content Protector web app."""

import os

from content_protector.web.app import create_app

app = create_app(config_path=os.environ.get("CONFIG_PATH", "config.yaml"))

if __name__ == "__main__":
    port = int(os.environ.get("PORT", app.config["CP_CONFIG"].web.port))
    host = os.environ.get("HOST", app.config["CP_CONFIG"].web.host)
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"

    print(f"Starting Content Protector at http://{host}:{port}")
    app.run(host=host, port=port, debug=debug)
