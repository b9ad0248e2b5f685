"""
Reelfolio Server
================

Run with:
    python app.py

Visit:
    http://localhost:5001              - Portfolio
    http://localhost:5001/api/projects - Project list
    http://localhost:5001/health       - Health check

Triple-click the name in the header to open the admin panel.
"""

import sys

from reelfolio import create_app
from reelfolio.core.config import Config
from reelfolio.core.errors import ConfigError

try:
    app = create_app()
except ConfigError as e:
    print(e.message, file=sys.stderr)
    sys.exit(1)


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Reelfolio")
    print("=" * 60)
    print(f"Portfolio:       http://localhost:{Config.port}")
    print(f"Projects API:    http://localhost:{Config.port}/api/projects")
    print(f"Health:          http://localhost:{Config.port}/health")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=not Config.IS_PRODUCTION)
